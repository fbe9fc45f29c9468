from __future__ import annotations

import asyncio
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.domain.exceptions import OptionsDocumentError
from ..core.domain.models import OptionsSnapshot, OutputFormat, TargetPlatform, TargetVersion


AVAILABLE_FORMATS = ("Excel", "HTML", "Json", "DGML", "CSV")


class VersionDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    version: str
    selected: bool = False


class PlatformDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    versions: list[VersionDocument] = Field(default_factory=list)


class OptionsDocument(BaseModel):
    """Selection state as stored in an options JSON file.

    Every field is optional; missing ones fall back to the configured defaults.
    """

    model_config = ConfigDict(extra="forbid")

    targets: list[PlatformDocument] = Field(default_factory=list)
    invalid_targets: list[str] = Field(
        default_factory=list,
        description="Names of platforms the analysis service no longer supports",
    )
    formats: list[str] | None = None
    output_directory: Path | None = None
    default_output_name: str | None = None
    save_metadata: bool | None = None


def _platform(doc: PlatformDocument) -> TargetPlatform:
    return TargetPlatform(
        name=doc.name,
        versions=tuple(
            TargetVersion(platform=doc.name, version=v.version, selected=v.selected)
            for v in doc.versions
        ),
    )


class OptionsViewModel:
    """Options view model fed by configured defaults and an optional JSON document.

    ``update()`` re-reads the document each time, so a refresh always reflects
    the file's current content. Refreshing twice yields the same snapshot as
    refreshing once.
    """

    def __init__(
        self,
        *,
        output_directory: Path,
        default_output_name: str,
        formats: list[str] | tuple[str, ...] = ("HTML",),
        save_metadata: bool = True,
        options_file: Path | None = None,
    ) -> None:
        self._defaults = OptionsDocument(
            formats=list(formats),
            output_directory=Path(output_directory),
            default_output_name=default_output_name,
            save_metadata=save_metadata,
        )
        self._options_file = options_file
        self._snapshot = self._build(self._defaults)

    async def update(self) -> None:
        document = self._defaults
        if self._options_file is not None and self._options_file.exists():
            document = await asyncio.to_thread(self._load, self._options_file)
        self._snapshot = self._build(document)

    def snapshot(self) -> OptionsSnapshot:
        return self._snapshot

    def _load(self, path: Path) -> OptionsDocument:
        try:
            loaded = OptionsDocument.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise OptionsDocumentError(str(path), f"Cannot read options document {path}: {e}") from e
        except ValidationError as e:
            raise OptionsDocumentError(str(path), f"Invalid options document {path}: {e}") from e
        # Fields absent from the file keep their configured default
        overrides = {name: getattr(loaded, name) for name in loaded.model_fields_set}
        return self._defaults.model_copy(update=overrides)

    def _build(self, document: OptionsDocument) -> OptionsSnapshot:
        invalid = set(document.invalid_targets)
        platforms = [_platform(p) for p in document.targets]
        selected_formats = set(document.formats or ())
        available = list(AVAILABLE_FORMATS)
        available.extend(f for f in document.formats or () if f not in available)

        return OptionsSnapshot(
            targets=tuple(p for p in platforms if p.name not in invalid),
            invalid_targets=tuple(p for p in platforms if p.name in invalid),
            formats=tuple(OutputFormat(name=f, selected=f in selected_formats) for f in available),
            output_directory=str(document.output_directory or ""),
            default_output_name=document.default_output_name or "",
            save_metadata=True if document.save_metadata is None else document.save_metadata,
        )
