import typing

from pydantic import BaseModel, field_validator
from starlette.datastructures import MutableHeaders


class HeaderMutation(BaseModel):
    name: str
    value: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str):
        if not value or any(c.isspace() or c == ":" for c in value):
            raise ValueError(f"Invalid header name: {value!r}")
        return value

    def apply(self, headers: MutableHeaders):
        headers[self.name] = self.value


class CorsPolicy(BaseModel):
    headers: typing.List[HeaderMutation]
    handle_preflight: bool = False

    def apply(self, headers: MutableHeaders):
        for mutation in self.headers:
            mutation.apply(headers)

    def is_preflight(self, method: str) -> bool:
        return self.handle_preflight and method.upper() == "OPTIONS"


IMAGE_CORS_POLICY = CorsPolicy(
    headers=[
        HeaderMutation(name="Access-Control-Allow-Origin", value="*"),
        HeaderMutation(name="Access-Control-Allow-Methods", value="GET, OPTIONS"),
        HeaderMutation(name="Access-Control-Allow-Headers", value="*"),
    ],
    handle_preflight=True,
)

TEXT_CORS_POLICY = CorsPolicy(
    headers=[
        HeaderMutation(name="Access-Control-Allow-Origin", value="*"),
    ],
)

META_CORS_POLICY = CorsPolicy(headers=[])
