"""
Unit tests for download filename suggestions.
"""

from tiksave.services.naming import suggest_download_filename


class TestSuggestDownloadFilename:
    """Test cases for suggest_download_filename."""

    def test_fixed_timestamp(self):
        """The filename embeds the timestamp in milliseconds."""
        assert suggest_download_filename(now=1700000000.5) == "tiktok-video-1700000000500.mp4"

    def test_current_time(self):
        """Without a timestamp the current time is used."""
        name = suggest_download_filename()

        assert name.startswith("tiktok-video-")
        assert name.endswith(".mp4")
        assert name[len("tiktok-video-"):-len(".mp4")].isdigit()
