from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TagValue(_ApiModel):
    """Single value inside a tag group"""
    value: Any = None


class TagGroup(_ApiModel):
    """Tag group such as 'genre' or 'actors'"""
    objects: list[TagValue] = Field(default_factory=list)

    @field_validator("objects", mode="before")
    @classmethod
    def drop_null_objects(cls, v):
        if not isinstance(v, list):
            return []
        return [obj for obj in v if isinstance(obj, dict)]

    def values(self) -> list[Any]:
        """Non-null values in provider order"""
        return [obj.value for obj in self.objects if obj.value is not None]

    def first_value(self) -> Any:
        """Value of the first object, null or not"""
        return self.objects[0].value if self.objects else None


class MetaValue(_ApiModel):
    """Single metadata entry such as 'year' or 'season number'"""
    value: Any = None


class ApiImage(_ApiModel):
    """Programme artwork reference"""
    url: str | None = None
    image_type_name: str | None = Field(None, alias="imageTypeName")

    @field_validator("url", "image_type_name", mode="before")
    @classmethod
    def drop_non_text(cls, v):
        return v if isinstance(v, str) else None


class ApiProgramme(_ApiModel):
    """Programme object from the provider schedule response"""
    name: str = Field(..., description="Programme title")
    description: str | None = Field(None, description="Programme synopsis")
    start_date: int = Field(..., alias="startDate", description="Provider epoch start")
    end_date: int = Field(..., alias="endDate", description="Provider epoch end")
    tags: dict[str, TagGroup] = Field(default_factory=dict)
    metas: dict[str, MetaValue] = Field(default_factory=dict)
    images: list[ApiImage] = Field(default_factory=list)

    @field_validator("tags", "metas", mode="before")
    @classmethod
    def drop_null_entries(cls, v):
        if not isinstance(v, dict):
            return {}
        return {key: entry for key, entry in v.items() if isinstance(entry, dict)}

    @field_validator("images", mode="before")
    @classmethod
    def drop_null_images(cls, v):
        if not isinstance(v, list):
            return []
        return [image for image in v if isinstance(image, dict)]

    def tag_values(self, tag: str) -> list[Any] | None:
        """Values of a tag group, or None if the tag is absent"""
        group = self.tags.get(tag)
        if group is None:
            return None
        return group.values()

    def tag_first_value(self, tag: str) -> Any:
        """Value of the first object of a tag group, or None if absent"""
        group = self.tags.get(tag)
        if group is None:
            return None
        return group.first_value()

    def meta_value(self, meta: str) -> Any:
        """Value of a metadata entry, or None if absent"""
        entry = self.metas.get(meta)
        if entry is None:
            return None
        return entry.value


class ApiErrorPayload(_ApiModel):
    """Error body sent alongside HTML error responses"""
    server_id: str | int | None = Field(None, alias="serverID")
    datetime: str | int | None = None
    message: str | None = None
    code: int | str | None = None
    response: Any = None
