"""
Author collection and author resource endpoints.

GET on the collection returns one page of authors; the page position is
described by the X-Pagination header, including links to the previous and
next page when they exist.
"""

from uuid import UUID

from fastapi import APIRouter, Request, Response, status

from course_library.commands.author_commands import (
    CreateAuthorCommand,
    GetAuthorCommand,
    GetAuthorsCommand,
)
from course_library.constants import PAGINATION_HEADER
from course_library.dependencies import AuthorRepoDep, AuthorsParamsDep
from course_library.models.author import Author
from course_library.schemas.author import AuthorDto, AuthorForCreationDto
from course_library.schemas.parameters import AuthorsResourceParameters
from course_library.schemas.response import PaginationMetadata
from course_library.storage.paged_list import PagedList
from course_library.utils.content_negotiation import ContentNegotiationRoute

router = APIRouter(
    prefix="/api/authors", tags=["authors"], route_class=ContentNegotiationRoute
)

ALLOWED_COLLECTION_METHODS = "GET,HEAD,POST,OPTIONS"


def create_authors_resource_uri(
    request: Request, params: AuthorsResourceParameters, page_number: int
) -> str:
    """Link to a page of the author collection with the same filters."""
    url = request.url_for("get_authors")
    return str(url.include_query_params(**params.to_query_params(page_number)))


def build_pagination_metadata(
    request: Request,
    params: AuthorsResourceParameters,
    page: PagedList[Author],
) -> PaginationMetadata:
    previous_page_link = (
        create_authors_resource_uri(request, params, params.page_number - 1)
        if page.has_previous
        else None
    )
    next_page_link = (
        create_authors_resource_uri(request, params, params.page_number + 1)
        if page.has_next
        else None
    )
    return PaginationMetadata(
        total_count=page.total_count,
        page_size=page.page_size,
        current_page=page.current_page,
        total_pages=page.total_pages,
        previous_page_link=previous_page_link,
        next_page_link=next_page_link,
    )


@router.api_route(
    "",
    methods=["GET", "HEAD"],
    name="get_authors",
    response_model=list[AuthorDto],
    summary="Get a page of authors",
)
async def get_authors(
    request: Request,
    response: Response,
    repo: AuthorRepoDep,
    params: AuthorsParamsDep,
) -> list[AuthorDto]:
    """
    Get a page of authors, filtered, searched and sorted.

    Example:
        GET /api/authors?mainCategory=History&orderBy=age desc&pageSize=5
    """
    page = await GetAuthorsCommand(repo).execute(params)

    metadata = build_pagination_metadata(request, params, page)
    response.headers[PAGINATION_HEADER] = metadata.model_dump_json(by_alias=True)

    return [AuthorDto.from_entity(author) for author in page]


@router.get(
    "/{author_id}",
    name="get_author",
    response_model=AuthorDto,
    summary="Get an author",
)
async def get_author(author_id: UUID, repo: AuthorRepoDep) -> AuthorDto:
    author = await GetAuthorCommand(repo).execute(author_id)
    return AuthorDto.from_entity(author)


@router.post(
    "",
    response_model=AuthorDto,
    status_code=status.HTTP_201_CREATED,
    summary="Create an author with optional courses",
)
async def create_author(
    author_data: AuthorForCreationDto,
    request: Request,
    response: Response,
    repo: AuthorRepoDep,
) -> AuthorDto:
    """
    Create an author and its nested courses.

    Example:
        POST /api/authors
        {
            "firstName": "Jane",
            "lastName": "Austen",
            "dateOfBirth": "1975-12-16",
            "mainCategory": "Romance",
            "courses": [{"title": "Irony", "description": "Reading closely"}]
        }
    """
    author = await CreateAuthorCommand(repo).execute(author_data)

    response.headers["Location"] = str(
        request.url_for("get_author", author_id=str(author.id))
    )
    return AuthorDto.from_entity(author)


@router.options("", summary="Describe the author collection")
async def get_authors_options() -> Response:
    return Response(
        status_code=status.HTTP_200_OK,
        headers={"Allow": ALLOWED_COLLECTION_METHODS},
    )
