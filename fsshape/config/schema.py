from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fsshape.models.scan import DEFAULT_EXCLUDED_EXTENSIONS, DEFAULT_ROOT_PATHS, ScanOptions
from fsshape.scan import normalize_extension


@dataclass(slots=True)
class AppConfig:
    default_roots: list[str] = field(default_factory=lambda: list(DEFAULT_ROOT_PATHS))
    excluded_extensions: list[str] = field(default_factory=lambda: sorted(DEFAULT_EXCLUDED_EXTENSIONS))
    progress_interval: int = 100
    summary_bar_width: int = 16

    def scan_options(self) -> ScanOptions:
        return ScanOptions(
            excluded_extensions=frozenset(self.excluded_extensions),
            progress_interval=self.progress_interval,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "defaultRoots": self.default_roots,
            "excludedExtensions": self.excluded_extensions,
            "progressInterval": self.progress_interval,
            "summaryBarWidth": self.summary_bar_width,
        }


def default_config() -> AppConfig:
    return AppConfig()


def _str_list(data: dict[str, Any], key: str, default: list[str]) -> list[str]:
    value = data.get(key, default)
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list")
    return [str(x) for x in value]


def from_dict(data: dict[str, Any], defaults: AppConfig) -> AppConfig:
    extensions = [normalize_extension(x) for x in _str_list(data, "excludedExtensions", defaults.excluded_extensions)]
    return AppConfig(
        default_roots=_str_list(data, "defaultRoots", defaults.default_roots),
        excluded_extensions=[ext for ext in extensions if ext],
        progress_interval=max(1, int(data.get("progressInterval", defaults.progress_interval))),
        summary_bar_width=max(4, int(data.get("summaryBarWidth", defaults.summary_bar_width))),
    )
