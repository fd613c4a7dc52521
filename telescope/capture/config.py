"""Immutable capture configuration snapshot."""

from dataclasses import dataclass, field

from telescope.settings import Settings

DEFAULT_SIZE_LIMIT_KB = 64
DEFAULT_PROXY_HEADER = "x-real-ip"


@dataclass(frozen=True)
class CaptureConfig:
    """
    Capture-relevant settings, frozen so one instance can be shared by
    every in-flight request and worker thread.
    """

    enabled: bool = True
    enabled_kinds: frozenset[str] = field(default_factory=lambda: frozenset({"request"}))
    size_limit_kb: int = DEFAULT_SIZE_LIMIT_KB
    hidden_response_parameters: tuple[str, ...] = ()
    hidden_request_parameters: tuple[str, ...] = ("password", "password_confirmation")
    hidden_request_headers: frozenset[str] = field(
        default_factory=lambda: frozenset({"authorization", "cookie", "x-api-key"})
    )
    ignore_paths: tuple[str, ...] = ()
    only_paths: tuple[str, ...] = ()
    trusted_proxy_header: str = DEFAULT_PROXY_HEADER

    def is_enabled(self, kind: str) -> bool:
        return self.enabled and kind.lower() in self.enabled_kinds

    @classmethod
    def from_settings(cls, settings: Settings) -> "CaptureConfig":
        return cls(
            enabled=settings.enabled,
            enabled_kinds=frozenset(settings.enabled_kinds_list),
            size_limit_kb=settings.response_size_limit,
            hidden_response_parameters=tuple(settings.hidden_response_parameters_list),
            hidden_request_parameters=tuple(settings.hidden_request_parameters_list),
            hidden_request_headers=frozenset(settings.hidden_request_headers_list),
            ignore_paths=tuple(settings.ignore_paths_list),
            only_paths=tuple(settings.only_paths_list),
            trusted_proxy_header=settings.trusted_proxy_header.lower(),
        )
