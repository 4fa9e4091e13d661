"""
Tests for PDF document utilities.
"""

import pytest
from unittest.mock import MagicMock

from pdf_image_codec.exceptions import PageOutOfRangeError
from pdf_image_codec.utils.pdf_utils import (
    get_pdf_page_count,
    get_page_images,
)


class TestPDFUtils:
    """Test suite for PDF utilities."""

    def test_get_pdf_page_count(self):
        """Test getting page count from PDF document."""
        mock_doc = MagicMock()
        mock_doc.page_count = 10

        result = get_pdf_page_count(mock_doc)

        assert result == 10

    def test_get_page_images_is_one_based(self):
        """Page numbers start at 1 and map to PyMuPDF's 0-based index."""
        mock_doc = MagicMock()
        mock_doc.page_count = 3
        expected_images = [
            (1, 0, 100, 100, 8, "DeviceRGB", "", "Im1", "DCTDecode"),
            (2, 0, 200, 200, 8, "DeviceRGB", "", "Im2", "DCTDecode")
        ]
        mock_doc.get_page_images.return_value = expected_images

        result = get_page_images(mock_doc, 1)

        assert result == expected_images
        mock_doc.get_page_images.assert_called_once_with(0)

    def test_get_page_images_empty(self):
        """Test getting images from page with no images."""
        mock_doc = MagicMock()
        mock_doc.page_count = 6
        mock_doc.get_page_images.return_value = []

        result = get_page_images(mock_doc, 6)

        assert result == []
        mock_doc.get_page_images.assert_called_once_with(5)

    @pytest.mark.parametrize("page_number", [0, -1, 4])
    def test_get_page_images_out_of_range(self, page_number):
        mock_doc = MagicMock()
        mock_doc.page_count = 3

        with pytest.raises(PageOutOfRangeError):
            get_page_images(mock_doc, page_number)
        mock_doc.get_page_images.assert_not_called()
