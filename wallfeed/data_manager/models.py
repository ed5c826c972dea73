# wallfeed/data_manager/models.py

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ValidationError, field_serializer, field_validator

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# --------- VK attachments ---------


class ImageSize(BaseModel):
    url:   str = ""
    width: int = 0

    @field_validator("width", mode="before")
    @classmethod
    def _v_width(cls, v):
        return 0 if v is None else v


class LinkPhoto(BaseModel):
    sizes: List[ImageSize] = []


class LinkPayload(BaseModel):
    url:         str
    title:       Optional[str] = None
    description: Optional[str] = None
    photo:       Optional[LinkPhoto] = None


class PhotoPayload(BaseModel):
    sizes: List[ImageSize] = []


class VideoPayload(BaseModel):
    title:       Optional[str] = None
    description: Optional[str] = None
    image:       List[ImageSize] = []


class LinkAttachment(BaseModel):
    type: Literal["link"] = "link"
    link: LinkPayload


class PhotoAttachment(BaseModel):
    type:  Literal["photo"] = "photo"
    photo: PhotoPayload


class VideoAttachment(BaseModel):
    type:  Literal["video"] = "video"
    video: VideoPayload


class OtherAttachment(BaseModel):
    """Всё, что не ссылка/фото/видео (аудио, опросы, документы...)."""
    type: str = "other"


Attachment = Union[LinkAttachment, PhotoAttachment, VideoAttachment, OtherAttachment]

ATTACHMENT_MODELS = {
    "link":  LinkAttachment,
    "photo": PhotoAttachment,
    "video": VideoAttachment,
}


def parse_attachment(raw: Any) -> Attachment:
    """Неизвестный тип или битый payload → OtherAttachment, без исключений."""
    if isinstance(raw, BaseModel):
        return raw
    if not isinstance(raw, dict):
        return OtherAttachment()

    tag = str(raw.get("type") or "other")
    model = ATTACHMENT_MODELS.get(tag)
    if model is None:
        return OtherAttachment(type=tag)
    try:
        return model.model_validate(raw)
    except ValidationError:
        return OtherAttachment(type=tag)


# --------- VK post ---------


class RawPost(BaseModel):
    id:            int = 0
    owner_id:      int = 0
    date:          int = 0
    text:          str = ""
    attachments:   List[Attachment] = []
    copy_history:  List[RawPost] = []
    marked_as_ads: bool = False

    @field_validator("attachments", mode="before")
    @classmethod
    def _v_attachments(cls, v):
        return [parse_attachment(a) for a in (v or [])]

    @field_validator("text", mode="before")
    @classmethod
    def _v_text(cls, v):
        return v or ""

    @field_validator("copy_history", mode="before")
    @classmethod
    def _v_history(cls, v):
        return v or []

    @property
    def permalink(self) -> str:
        return f"https://vk.com/wall{self.owner_id}_{self.id}"


# --------- News record ---------


class NewsRecord(BaseModel):
    source:      Literal["vk", "zen"]
    title:       str
    content:     str
    excerpt:     str
    image:       Optional[str] = None
    link:        str
    date:        datetime
    external_id: str
    is_manual:   bool = False

    @field_validator("date", mode="before")
    @classmethod
    def _v_date(cls, v):
        if isinstance(v, str):
            return datetime.strptime(v, DATE_FORMAT)
        return v

    @field_serializer("date")
    def _s_date(self, v: datetime) -> str:
        return v.strftime(DATE_FORMAT)
