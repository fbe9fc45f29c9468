from __future__ import annotations

import base64
import binascii
import os
from pathlib import Path
from typing import Any

import httpx

from ..core.domain.exceptions import EngineRequestError
from ..core.domain.models import AnalysisOutcome, AnalysisRequest, AnalyzeRequestFlags, ReportingResult
from ..core.ports import IssueReporterPort, LoggerPort, ReportWriterPort


FORMAT_EXTENSIONS = {
    "excel": "xlsx",
    "html": "html",
    "json": "json",
    "dgml": "dgml",
    "csv": "csv",
}


def extension_for(format_name: str) -> str:
    return FORMAT_EXTENSIONS.get(format_name.lower(), format_name.lower())


def request_to_payload(request: AnalysisRequest, formats: list[str]) -> dict[str, Any]:
    """Serialize a request for the analysis service."""
    return {
        "entrypoint": request.entrypoint,
        "inputAssemblies": [
            {"path": a.path, "flag": a.flag}
            for a in sorted(request.input_assemblies, key=lambda a: a.path)
        ],
        "targets": list(request.targets),
        "outputFormats": formats,
        "requestFlags": [f.name for f in AnalyzeRequestFlags if f.name != "NONE" and f in request.request_flags],
        "referencedNuGetPackages": sorted(request.referenced_packages),
        "ignoredAssemblyFiles": sorted(request.ignored_assembly_files),
        "breakingChangeSuppressions": sorted(request.breaking_change_suppressions),
        "invalidInputFiles": sorted(request.invalid_input_files),
    }


def parse_result(data: dict[str, Any]) -> ReportingResult:
    return ReportingResult(
        submission_id=data.get("submissionId"),
        targets=tuple(data.get("targets") or ()),
        missing_dependencies=tuple(data.get("missingDependencies") or ()),
        unresolved_user_assemblies=tuple(data.get("unresolvedUserAssemblies") or ()),
        raw=data,
    )


class HttpAnalysisEngine:
    """Client for a portability analysis service.

    Posts the request to ``{endpoint}/api/analyze`` and writes each returned
    report through the session's writer. Service-side failures are recorded
    as issues and yield an outcome without paths; transport errors are
    raised to the caller.
    """

    def __init__(
        self,
        *,
        endpoint: str,
        issues: IssueReporterPort,
        logger: LoggerPort,
        timeout: float = 60.0,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._issues = issues
        self._logger = logger
        self._timeout = timeout
        self._api_key = api_key
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return httpx.AsyncClient(
            base_url=self._endpoint,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def analyze(
        self,
        request: AnalysisRequest,
        *,
        include_json: bool,
        writer: ReportWriterPort,
    ) -> AnalysisOutcome:
        formats = list(request.output_formats)
        if include_json and not any(f.lower() == "json" for f in formats):
            formats.append("Json")

        payload = request_to_payload(request, formats)
        self._logger.debug("engine_request", type="engine_request", endpoint=self._endpoint, payload=payload)

        async with self._client() as client:
            response = await client.post("/api/analyze", json=payload)

        if response.is_error:
            self._issues.report_issue(
                f"Analysis service returned {response.status_code} {response.reason_phrase}"
            )
            self._logger.error("engine_http_error", type="engine_http_error", status=response.status_code)
            return AnalysisOutcome(paths=())

        try:
            body = response.json()
        except ValueError as e:
            raise EngineRequestError(self._endpoint) from e
        if not isinstance(body, dict):
            raise EngineRequestError(self._endpoint)

        issues = body.get("issues") or []
        if isinstance(issues, str):
            issues = [issues]
        if not isinstance(issues, list):
            raise EngineRequestError(self._endpoint, "Field 'issues' must be a list")

        result_data = body.get("result") or {}
        if not isinstance(result_data, dict):
            raise EngineRequestError(self._endpoint, "Field 'result' must be an object")

        reports = body.get("reports") or {}
        if not isinstance(reports, dict):
            raise EngineRequestError(self._endpoint, "Field 'reports' must be an object")

        for issue in issues:
            self._issues.report_issue(str(issue))

        result = parse_result(result_data)

        directory, file_name = os.path.split(request.output_file_name)
        paths: list[Path] = []
        for format_name in formats:
            encoded = reports.get(format_name)
            if encoded is None:
                self._issues.report_issue(f"No {format_name} report was returned for {request.entrypoint}")
                continue
            try:
                content = base64.b64decode(encoded, validate=True)
            except (binascii.Error, TypeError) as e:
                raise EngineRequestError(self._endpoint, f"Report '{format_name}' is not valid base64") from e

            path = await writer.write_report(
                content,
                directory=Path(directory),
                file_name=file_name,
                extension=extension_for(format_name),
                overwrite=False,
            )
            paths.append(path)

        return AnalysisOutcome(paths=tuple(paths), result=result)
