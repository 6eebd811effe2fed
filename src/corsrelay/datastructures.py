import typing
from dataclasses import dataclass, field


@dataclass
class FetchOptions:
    timeout: float | None
    follow_redirects: bool
    max_redirects: int
    verify: bool
    headers: typing.Dict[str, str] = field(default_factory=dict)

    def client_kwargs(self) -> typing.Dict[str, typing.Any]:
        return {
            "timeout": self.timeout,
            "follow_redirects": self.follow_redirects,
            "max_redirects": self.max_redirects,
            "verify": self.verify,
            "headers": self.headers,
        }


@dataclass
class UpstreamResponse:
    status_code: int
    body: bytes
    content_type: str | None = None
    detected_encoding: str | None = None
