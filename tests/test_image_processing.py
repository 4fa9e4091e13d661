"""
Tests for image processing utilities.
"""

import pytest
from unittest.mock import patch, MagicMock
from PIL import Image

from pdf_image_codec.utils.image_processing import (
    handle_alpha_channel,
    pixmap_to_image,
    recover_pixmap,
)
from pdf_image_codec.models import ImageMetadata, RawImageStream

from conftest import gradient_image, image_bytes


def make_metadata(smask=0, colorspace="DeviceRGB"):
    return ImageMetadata(
        xref=1, smask=smask, width=100, height=80,
        bpc=8, colorspace=colorspace, alt_colorspace="", name="Im1",
        filter_type="DCTDecode"
    )


def make_pixmap(n=3, width=100, height=80, data=b"png"):
    pix = MagicMock()
    pix.alpha = False
    pix.n = n
    pix.width = width
    pix.height = height
    pix.colorspace.n = n
    pix.tobytes.return_value = data
    return pix


class TestImageProcessing:
    """Test suite for image processing utilities."""

    def test_handle_alpha_channel_with_alpha(self):
        """Test removing alpha channel from pixmap."""
        mock_pix = MagicMock()
        mock_pix.alpha = True

        with patch('pdf_image_codec.utils.image_processing.Pixmap') as mock_pixmap_class:
            mock_new_pix = MagicMock()
            mock_pixmap_class.return_value = mock_new_pix

            result = handle_alpha_channel(mock_pix)

            assert result == mock_new_pix
            mock_pixmap_class.assert_called_once_with(mock_pix, 0)

    def test_handle_alpha_channel_without_alpha(self):
        """Test pixmap without alpha channel is returned unchanged."""
        mock_pix = MagicMock()
        mock_pix.alpha = False

        result = handle_alpha_channel(mock_pix)

        assert result == mock_pix

    @patch('pdf_image_codec.utils.image_processing.Pixmap')
    def test_recover_pixmap_with_smask(self, mock_pixmap_class):
        """Test recovering pixmap with SMask."""
        mock_doc = MagicMock()
        mock_doc.extract_image.side_effect = [
            {"image": b"base_image"},
            {"image": b"mask_image"}
        ]

        mock_pix0 = make_pixmap()
        mock_mask = make_pixmap(n=1)
        mock_combined = make_pixmap(data=b"combined_image")

        mock_pixmap_class.side_effect = [mock_pix0, mock_mask, mock_combined]

        result = recover_pixmap(mock_doc, make_metadata(smask=2), page_number=3)

        assert isinstance(result, RawImageStream)
        assert result.file_type == "png"
        assert result.page_number == 3
        assert result.colorspace == 3
        assert (result.width, result.height) == (100, 80)
        assert result.data == b"combined_image"
        mock_pixmap_class.assert_called_with(mock_pix0, mock_mask)

    @patch('pdf_image_codec.utils.image_processing.Pixmap')
    def test_recover_pixmap_with_smask_error(self, mock_pixmap_class):
        """Test fallback to the base image when combining with mask fails."""
        mock_doc = MagicMock()
        mock_doc.extract_image.side_effect = [
            {"image": b"base_image"},
            {"image": b"mask_image"},
        ]

        mock_pix0 = make_pixmap(data=b"base_result")
        mock_mask = make_pixmap(n=1)

        mock_pixmap_class.side_effect = [mock_pix0, mock_mask, Exception("Combine failed")]

        result = recover_pixmap(mock_doc, make_metadata(smask=2), page_number=1)

        assert result.file_type == "png"
        assert result.data == b"base_result"
        mock_pix0.tobytes.assert_called_once_with("png")

    @patch('pdf_image_codec.utils.image_processing.csRGB')
    @patch('pdf_image_codec.utils.image_processing.Pixmap')
    def test_recover_pixmap_converts_cmyk(self, mock_pixmap_class, mock_csrgb):
        """Test recovering an image stored in a CMYK color space."""
        mock_doc = MagicMock()
        mock_doc.extract_image.return_value = {
            "ext": "jpeg", "colorspace": 4, "width": 100, "height": 80, "image": b"cmyk"
        }

        mock_pix1 = make_pixmap(n=4)
        mock_pix2 = make_pixmap(data=b"converted_image")

        mock_pixmap_class.side_effect = [mock_pix1, mock_pix2]

        result = recover_pixmap(mock_doc, make_metadata(colorspace="DeviceCMYK"), page_number=1)

        assert result.file_type == "png"
        assert result.colorspace == 3
        assert result.data == b"converted_image"
        mock_pixmap_class.assert_any_call(mock_doc, 1)
        mock_pixmap_class.assert_any_call(mock_csrgb, mock_pix1)

    def test_recover_pixmap_normal_case(self):
        """Test normal image extraction without special cases."""
        mock_doc = MagicMock()
        mock_doc.extract_image.return_value = {
            "ext": "jpeg",
            "colorspace": 3,
            "width": 100,
            "height": 80,
            "image": b"normal_image"
        }

        result = recover_pixmap(mock_doc, make_metadata(), page_number=2)

        assert result == RawImageStream(
            page_number=2, xref=1, file_type="jpeg", width=100, height=80,
            colorspace=3, data=b"normal_image"
        )
        mock_doc.extract_image.assert_called_once_with(1)

    def test_recover_pixmap_missing_data(self):
        mock_doc = MagicMock()
        mock_doc.extract_image.return_value = {}

        with pytest.raises(ValueError):
            recover_pixmap(mock_doc, make_metadata(), page_number=1)

    def test_pixmap_to_image(self):
        import pymupdf

        pix = pymupdf.Pixmap(image_bytes(gradient_image(12, 6), "PNG"))

        image = pixmap_to_image(pix)

        assert isinstance(image, Image.Image)
        assert image.size == (12, 6)
        assert image.mode == "RGB"
