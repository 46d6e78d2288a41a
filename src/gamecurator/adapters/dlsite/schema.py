"""DLsite response schemas for the suggest and product-info endpoints."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)

type WorkNumber = str  # RJ/RE/VJ followed by 6 or 8 digits
type DlsiteDateTime = str  # Format: YYYY-MM-DD HH:MM:SS, Japan local time


class DlsiteBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "DLsite %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class DlsiteSuggestWork(DlsiteBaseModel):
    workno: WorkNumber
    work_name: str | None = None
    maker_name: str | None = None


class DlsiteSuggestResponse(DlsiteBaseModel):
    work: list[DlsiteSuggestWork] = Field(default_factory=list)


class DlsiteProductInfo(DlsiteBaseModel):
    work_name: str | None = None
    maker_name: str | None = None
    regist_date: DlsiteDateTime | None = None
    rate_average_2dp: float | None = None
    rate_count: int | None = None
    work_image: str | None = None
    site_id: str | None = None
    title_name: str | None = None

    def release_date(self) -> datetime | None:
        if not self.regist_date:
            return None
        try:
            parsed = datetime.strptime(self.regist_date, "%Y-%m-%d %H:%M:%S")  # noqa: DTZ007
        except ValueError:
            log.debug("Unparseable DLsite date: %s", self.regist_date)
            return None
        return parsed.replace(tzinfo=UTC)

    def image_url(self) -> str | None:
        if not self.work_image:
            return None
        if self.work_image.startswith("//"):
            return f"https:{self.work_image}"
        return self.work_image
