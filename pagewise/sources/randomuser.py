"""
randomuser.me source.

Models the ``https://randomuser.me/api/`` response and maps it to a
PageEnvelope, so a feed of generated people can be paged through with
nothing more than ``randomuser_paginator()``.
"""

from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, computed_field

from ..config import PaginationOptions
from ..decoder import EnvelopeDecoder
from ..pagination import PageEnvelope
from ..paginator import Paginator

RANDOMUSER_ENDPOINT = "https://randomuser.me/api/?page={page_number}&results={page_size}"
DEFAULT_PAGE_SIZE = 5


class Name(BaseModel):
    title: str
    first: str
    last: str

    @property
    def full_name(self) -> str:
        return f"{self.title} {self.first} {self.last}"


class Street(BaseModel):
    number: int
    name: str


class Coordinates(BaseModel):
    latitude: str
    longitude: str


class Timezone(BaseModel):
    offset: str
    description: str


class Location(BaseModel):
    street: Street
    city: str
    state: str
    country: str
    # The API sends numeric postcodes for some nationalities, strings for others
    postcode: int | str
    coordinates: Coordinates
    timezone: Timezone

    @property
    def postcode_string(self) -> str:
        return str(self.postcode)


class Login(BaseModel):
    uuid: str


class DOB(BaseModel):
    date: str
    age: int


class Picture(BaseModel):
    large: str
    medium: str
    thumbnail: str


class Person(BaseModel):
    """One generated person. Identified by ``login.uuid``."""

    gender: str
    name: Name
    location: Location
    email: str
    login: Login
    dob: DOB
    phone: str
    cell: str
    picture: Picture
    nat: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def id(self) -> str:
        return self.login.uuid


class Info(BaseModel):
    seed: str
    results: int
    page: int
    version: str


class RandomUserResults(BaseModel):
    results: list[Person]
    info: Info


class RandomUserDecoder(EnvelopeDecoder[Person]):
    """Maps ``{"results": [...], "info": {"results", "page", ...}}`` to a PageEnvelope."""

    def __init__(self) -> None:
        super().__init__(Person)

    def decode(self, payload: Any) -> PageEnvelope[Person]:
        wire: RandomUserResults = self._validate(RandomUserResults, payload)
        return PageEnvelope(
            records=list(wire.results),
            result_count=wire.info.results,
            page_number=wire.info.page,
        )


def randomuser_paginator(
    page_size: int = DEFAULT_PAGE_SIZE,
    *,
    seed: str | None = None,
    timeout: float = 10.0,
) -> Paginator[Person]:
    """
    Builds a paginator over randomuser.me.

    Args:
        page_size: People per page
        seed: Optional seed; the API returns the same people for the same
            seed and page, which keeps pages consistent across a session
        timeout: Per-request timeout in seconds
    """
    template = RANDOMUSER_ENDPOINT
    if seed is not None:
        template += f"&seed={quote(seed, safe='')}"

    options = PaginationOptions(endpoint_template=template, page_size=page_size, timeout=timeout)
    return Paginator.from_options(options, RandomUserDecoder())
