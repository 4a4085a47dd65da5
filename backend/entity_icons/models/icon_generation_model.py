# backend/entity_icons/models/icon_generation_model.py
from typing import Any, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field

from ..enums import IconFailureReason, IconGenerationStatus, IconVariantStatus
from .crop_model import CropRectangle


class IconGenerationConfig(BaseModel):
    """Caller overrides for a single icon generation run."""

    # Left untyped on purpose: anything that is not a mapping is ignored
    icon_sizes: Optional[Any] = Field(
        None, description="Size overrides merged over the base table"
    )
    coords: Optional[CropRectangle] = Field(None, description="Crop rectangle")
    filestore_prefix: Optional[str] = Field(
        None, description="Explicit filestore prefix (the entity GUID is appended)"
    )


class IconVariantResult(BaseModel):
    """Outcome for one size of an icon batch."""

    size: str
    status: IconVariantStatus
    filename: Optional[str] = None
    owner_guid: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    error: Optional[str] = None


class IconGenerationResult(BaseModel):
    """
    Structured outcome of ``IconPipeline.make_icons``.

    ``success``: every variant was generated or skipped, entity committed.
    ``partial_failure``: at least one variant failed, entity not committed.
    ``fatal``: nothing was attempted (see ``reason``).
    """

    status: IconGenerationStatus
    reason: Optional[IconFailureReason] = None
    variants: List[IconVariantResult] = Field(default_factory=list)

    @classmethod
    def fatal(cls, reason: IconFailureReason) -> "IconGenerationResult":
        return cls(status=IconGenerationStatus.FATAL, reason=reason)

    @property
    def success(self) -> bool:
        return self.status == IconGenerationStatus.SUCCESS

    def _sizes_with(self, status: IconVariantStatus) -> Set[str]:
        return {v.size for v in self.variants if v.status == status}

    @property
    def failed(self) -> Set[str]:
        return self._sizes_with(IconVariantStatus.FAILED)

    @property
    def generated(self) -> Set[str]:
        return self._sizes_with(IconVariantStatus.GENERATED)

    @property
    def skipped(self) -> Set[str]:
        return self._sizes_with(IconVariantStatus.SKIPPED)

    def variant(self, size: str) -> Optional[IconVariantResult]:
        for result in self.variants:
            if result.size == size:
                return result
        return None

    def __bool__(self) -> bool:
        return self.success


class IconServingInfo(BaseModel):
    """Everything the serving endpoint needs to emit a stored icon."""

    contents: bytes
    mimetype: str
    etag: str

    model_config = ConfigDict(frozen=True)
