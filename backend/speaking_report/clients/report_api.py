from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

STUDENT_REPORT_PATH = "/api/student-report"


@dataclass(frozen=True)
class ReportApiError(Exception):
    message: str
    status_code: int | None = None
    body: str | None = None

    def __str__(self) -> str:
        return self.message


class ReportApiClient:
    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 10.0,
        retries: int = 0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._retries = retries
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        last_error: Exception | None = None
        for _ in range(self._retries + 1):
            try:
                response = await self._client.request(method, path, **kwargs)
            except httpx.RequestError as exc:
                last_error = exc
            else:
                if response.status_code >= 500:
                    last_error = ReportApiError(
                        f"Report service error {response.status_code}",
                        status_code=response.status_code,
                        body=response.text,
                    )
                else:
                    return response
        if isinstance(last_error, ReportApiError):
            raise last_error
        raise ReportApiError(f"Report service request failed: {last_error}") from last_error

    async def get_json(self, path: str, **kwargs: Any) -> Any:
        response = await self._request("GET", path, **kwargs)
        if not response.is_success:
            raise ReportApiError(
                f"Report service error {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ReportApiError(
                "Report service returned a non-JSON body",
                status_code=response.status_code,
                body=response.text,
            ) from exc

    async def get_student_report(self) -> Any:
        return await self.get_json(STUDENT_REPORT_PATH)
