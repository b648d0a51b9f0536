"""Tests for Accept header negotiation and XML rendering."""

import pytest

from course_library.schemas.author import AuthorDto
from course_library.utils.content_negotiation import (
    JSON_MEDIA_TYPE,
    XML_MEDIA_TYPE,
    select_media_type,
    to_xml,
    xml_root_tag,
)


class TestSelectMediaType:
    """Tests for select_media_type."""

    @pytest.mark.parametrize(
        "accept,expected",
        [
            (None, JSON_MEDIA_TYPE),
            ("", JSON_MEDIA_TYPE),
            ("*/*", JSON_MEDIA_TYPE),
            ("application/json", JSON_MEDIA_TYPE),
            ("application/xml", XML_MEDIA_TYPE),
            ("TEXT/XML", XML_MEDIA_TYPE),
            ("text/html, application/xml;q=0.9, */*;q=0.8", XML_MEDIA_TYPE),
            ("application/json;q=0.5, application/xml", XML_MEDIA_TYPE),
            ("application/xml;q=0, application/json", JSON_MEDIA_TYPE),
        ],
    )
    def test_supported(self, accept, expected):
        assert select_media_type(accept) == expected

    @pytest.mark.parametrize(
        "accept", ["text/csv", "text/html, image/png", "application/xml;q=0"]
    )
    def test_unsupported(self, accept):
        assert select_media_type(accept) is None


class TestXmlRendering:
    """Tests for xml_root_tag and to_xml."""

    def test_root_tags(self):
        assert xml_root_tag(AuthorDto) == "AuthorDto"
        assert xml_root_tag(list[AuthorDto]) == "ArrayOfAuthorDto"
        assert xml_root_tag(None) == "Response"

    def test_list_items_use_model_name(self):
        document = to_xml(
            [{"id": "1", "mainCategory": "Rum"}, {"id": "2", "mainCategory": None}],
            "ArrayOfAuthorDto",
        )

        assert document.startswith(b"<?xml")
        assert (
            b"<ArrayOfAuthorDto><AuthorDto><Id>1</Id>"
            b"<MainCategory>Rum</MainCategory></AuthorDto>"
        ) in document
        assert b"<MainCategory />" in document

    def test_text_is_escaped(self):
        document = to_xml({"title": "Rum & <Ships>"}, "CourseDto")

        assert b"<Title>Rum &amp; &lt;Ships&gt;</Title>" in document
