"""Response models for the flickr.photos.* methods."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, TypeVar
from xml.etree import ElementTree as ET

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from flickr_rest.errors import APIError, DecodeError

ModelT = TypeVar("ModelT", bound=BaseModel)

STATUS_OK = "ok"
STATUS_FAIL = "fail"


def parse_rsp(body: bytes) -> ET.Element:
    """Parse a REST response body and return its ``<rsp>`` root element."""

    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise DecodeError(f"Malformed XML response: {exc}") from exc
    if root.tag != "rsp":
        raise DecodeError(f"Unexpected root element <{root.tag}>, expected <rsp>")
    return root


def validate(model: Type[ModelT], data: Dict[str, Any]) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(f"{model.__name__} does not match response schema: {exc}") from exc


def _error_attrs(root: ET.Element) -> Optional[Dict[str, str]]:
    err = root.find("err")
    return None if err is None else dict(err.attrib)


def _require_payload(root: ET.Element, payload: Optional[ET.Element], tag: str) -> None:
    """Only failure responses may omit the method payload."""

    if payload is None and root.get("stat") != STATUS_FAIL:
        raise DecodeError(f"Response with stat={root.get('stat')!r} has no <{tag}> element")


class ApiError(BaseModel):
    """Error payload embedded in a ``stat="fail"`` response."""

    model_config = ConfigDict(frozen=True)

    code: int
    msg: str = ""


class Photo(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    owner: str
    secret: str
    server: int
    farm: int
    title: str = ""
    is_public: bool = Field(False, alias="ispublic")
    is_friend: bool = Field(False, alias="isfriend")
    is_family: bool = Field(False, alias="isfamily")

    def image_url(self, size_suffix: str = "") -> str:
        """Build the static image URL for this photo.

        Size suffixes: s=75sq, q=150sq, t=100, m=240, n=320, z=640,
        b=1024, h=1600, k=2048. An empty suffix selects the 500px default.
        """
        suffix = f"_{size_suffix}" if size_suffix else ""
        return (
            f"https://farm{self.farm}.staticflickr.com/"
            f"{self.server}/{self.id}_{self.secret}{suffix}.jpg"
        )


class Photos(BaseModel):
    """One page of photo search results."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page: int
    pages: int
    per_page: int = Field(alias="perpage")
    total: int
    photos: List[Photo] = Field(default_factory=list, alias="photo")


class PhotosSearchResponse(BaseModel):
    """Decoded ``flickr.photos.search`` response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: str = Field(alias="stat")
    photos: Optional[Photos] = None
    error: Optional[ApiError] = Field(None, alias="err")

    @classmethod
    def from_xml(cls, body: bytes) -> "PhotosSearchResponse":
        root = parse_rsp(body)
        photos = root.find("photos")
        _require_payload(root, photos, "photos")
        data: Dict[str, Any] = {"stat": root.get("stat"), "err": _error_attrs(root)}
        if photos is not None:
            data["photos"] = {
                **photos.attrib,
                "photo": [dict(photo.attrib) for photo in photos.findall("photo")],
            }
        return validate(cls, data)

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    def raise_for_status(self) -> None:
        """Raise :class:`APIError` if the service reported a failure."""

        if self.ok:
            return
        if self.error is None:
            raise APIError(None, f"Request failed with status {self.status!r}")
        raise APIError(self.error.code, self.error.msg)


class Size(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    width: int
    height: int
    source: str
    url: str = ""
    media: str = ""

    @property
    def area(self) -> int:
        return self.width * self.height


class Sizes(BaseModel):
    """Size variants available for one photo, in server order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    can_blog: bool = Field(False, alias="canblog")
    can_print: bool = Field(False, alias="canprint")
    can_download: bool = Field(False, alias="candownload")
    sizes: List[Size] = Field(default_factory=list, alias="size")

    def get(self, label: str) -> Optional[Size]:
        for size in self.sizes:
            if size.label == label:
                return size
        return None

    def largest(self) -> Optional[Size]:
        if not self.sizes:
            return None
        return max(self.sizes, key=lambda size: size.area)


class PhotosGetSizesResponse(BaseModel):
    """Decoded ``flickr.photos.getSizes`` response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: str = Field(alias="stat")
    sizes: Optional[Sizes] = None
    error: Optional[ApiError] = Field(None, alias="err")

    @classmethod
    def from_xml(cls, body: bytes) -> "PhotosGetSizesResponse":
        root = parse_rsp(body)
        sizes = root.find("sizes")
        _require_payload(root, sizes, "sizes")
        data: Dict[str, Any] = {"stat": root.get("stat"), "err": _error_attrs(root)}
        if sizes is not None:
            data["sizes"] = {
                **sizes.attrib,
                "size": [dict(size.attrib) for size in sizes.findall("size")],
            }
        return validate(cls, data)

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    def raise_for_status(self) -> None:
        """Raise :class:`APIError` if the service reported a failure."""

        if self.ok:
            return
        if self.error is None:
            raise APIError(None, f"Request failed with status {self.status!r}")
        raise APIError(self.error.code, self.error.msg)
