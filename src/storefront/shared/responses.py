"""Uniform result envelope returned by every checkout operation."""

from dataclasses import dataclass
from typing import Any

SUCCESSFUL = "successful"
FAILED = "failed"


@dataclass(frozen=True)
class ServiceResponse:
    http_status: int
    status: str
    response_data: Any = None
    error_details: str | None = None

    @classmethod
    def ok(cls, data: Any, http_status: int = 200) -> "ServiceResponse":
        return cls(http_status=http_status, status=SUCCESSFUL, response_data=data)

    @classmethod
    def failed(cls, http_status: int, error_details: str) -> "ServiceResponse":
        return cls(http_status=http_status, status=FAILED, error_details=error_details)

    @property
    def is_successful(self) -> bool:
        return self.status == SUCCESSFUL

    def as_dict(self) -> dict:
        body = {"http_status": self.http_status, "status": self.status}
        if self.is_successful:
            body["response_data"] = self.response_data
        else:
            body["error_details"] = self.error_details
        return body
