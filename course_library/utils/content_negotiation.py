"""
Content negotiation for JSON and XML responses.

Routes using ``ContentNegotiationRoute`` serve JSON by default and XML when
the client prefers it. An Accept header naming only unsupported media types
is rejected with 406 before the endpoint runs.
"""

import json
import typing
from typing import Any, Callable, Coroutine
from xml.etree import ElementTree

from fastapi import Request, Response
from fastapi.routing import APIRoute

from course_library.exceptions import NotAcceptableError

JSON_MEDIA_TYPE = "application/json"
XML_MEDIA_TYPE = "application/xml"

# Accepted media ranges and the representation each one gets
SUPPORTED_MEDIA_RANGES = {
    "application/json": JSON_MEDIA_TYPE,
    "application/xml": XML_MEDIA_TYPE,
    "text/xml": XML_MEDIA_TYPE,
    "application/*": JSON_MEDIA_TYPE,
    "*/*": JSON_MEDIA_TYPE,
}

# Dropped when a JSON response is re-rendered as XML
_BODY_HEADERS = {"content-length", "content-type"}


def select_media_type(accept: str | None) -> str | None:
    """
    Pick the response media type for an Accept header.

    Media ranges are tried by descending quality, then in header order.
    Ranges with ``q=0`` are ignored.

    Args:
        accept: Raw Accept header value.

    Returns:
        JSON or XML media type, or None when nothing acceptable is supported.

    Example:
        >>> select_media_type("text/html, application/xml;q=0.9")
        'application/xml'
    """
    if not accept or not accept.strip():
        return JSON_MEDIA_TYPE

    candidates: list[tuple[float, int, str]] = []
    for index, part in enumerate(accept.split(",")):
        media_range, *params = [piece.strip() for piece in part.split(";")]
        quality = 1.0
        for param in params:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            candidates.append((-quality, index, media_range.lower()))

    for _, _, media_range in sorted(candidates):
        if media_range in SUPPORTED_MEDIA_RANGES:
            return SUPPORTED_MEDIA_RANGES[media_range]
    return None


def xml_root_tag(response_model: Any) -> str:
    """
    Root element name for a response model.

    ``AuthorDto`` serializes as ``<AuthorDto>``; ``list[AuthorDto]`` as
    ``<ArrayOfAuthorDto>``.
    """
    if response_model is None:
        return "Response"

    if typing.get_origin(response_model) in (list, tuple, set):
        args = typing.get_args(response_model)
        item = args[0] if args else None
        return f"ArrayOf{xml_root_tag(item)}"

    return getattr(response_model, "__name__", "Response")


def _element_name(key: str) -> str:
    return key[:1].upper() + key[1:]


def _fill_element(element: ElementTree.Element, value: Any, item_tag: str) -> None:
    if isinstance(value, dict):
        for key, child_value in value.items():
            child = ElementTree.SubElement(element, _element_name(str(key)))
            _fill_element(child, child_value, "Item")
    elif isinstance(value, list):
        for item in value:
            child = ElementTree.SubElement(element, item_tag)
            _fill_element(child, item, "Item")
    elif isinstance(value, bool):
        element.text = "true" if value else "false"
    elif value is not None:
        element.text = str(value)


def to_xml(content: Any, root_tag: str) -> bytes:
    """
    Render JSON-compatible content as an XML document.

    Args:
        content: Decoded JSON (dicts, lists, scalars).
        root_tag: Name of the document element.

    Returns:
        UTF-8 encoded XML with declaration.
    """
    item_tag = root_tag.removeprefix("ArrayOf") or "Item"
    root = ElementTree.Element(root_tag)
    _fill_element(root, content, item_tag)
    return ElementTree.tostring(root, encoding="utf-8", xml_declaration=True)


class ContentNegotiationRoute(APIRoute):
    """
    APIRoute that honours the Accept header.

    The endpoint always produces JSON; when XML was negotiated the JSON body
    is re-rendered as XML, keeping status code and headers.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()
        root_tag = xml_root_tag(self.response_model)

        async def negotiating_route_handler(request: Request) -> Response:
            media_type = select_media_type(request.headers.get("accept"))
            if media_type is None:
                raise NotAcceptableError(
                    f"Cannot produce any of: {request.headers.get('accept')}"
                )

            response = await original_route_handler(request)

            if media_type != XML_MEDIA_TYPE or not response.body:
                return response
            if response.media_type != JSON_MEDIA_TYPE:
                return response

            headers = {
                key: value
                for key, value in response.headers.items()
                if key.lower() not in _BODY_HEADERS
            }
            return Response(
                content=to_xml(json.loads(response.body), root_tag),
                status_code=response.status_code,
                headers=headers,
                media_type=XML_MEDIA_TYPE,
            )

        return negotiating_route_handler
