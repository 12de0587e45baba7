from pydantic import BaseModel, ConfigDict, Field


class QueryOptions(BaseModel):
    """Query parameters accepted by every endpoint.

    Parameters are emitted in field declaration order, base class fields first,
    and only when set to a non-null value.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # partial response selector, e.g. "values.name,next"
    fields: str | None = None

    def to_params(self) -> list[tuple[str, str]]:
        return [(name, str(value)) for name, value in self.model_dump(exclude_none=True).items()]


class PageOptions(QueryOptions):
    page: int | None = Field(default=None, ge=1)
    pagelen: int | None = Field(default=None, ge=1, le=100)


class FilterSortOptions(PageOptions):
    """Filtering and sorting for list endpoints.

    ``q`` uses the Bitbucket query language (``permission="admin"``), ``sort``
    takes a field name, prefixed with ``-`` for descending order.
    """

    q: str | None = None
    sort: str | None = None


class SearchCodeOptions(PageOptions):
    search_query: str = Field(min_length=1)
