from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from versioner.core.config import VersionerConfig
from versioner.core.result import Err, Ok, Result
from versioner.http import HttpClient
from versioner.manifest import FileReader, load_manifest
from versioner.output.console import ConsoleProtocol
from versioner.services.argv import parse_argv
from versioner.services.errors import (
    RemoteReadError,
    RemoteUpsertError,
    UpsertStep,
    VersioningError,
)
from versioner.services.request import (
    VersionInput,
    VersionRequest,
    resolve_read_request,
    resolve_request,
    skip_reason,
)

class VersioningService:
    """Record a release build's version and commit in the remote config store.

    A stamp is two sequential overwriting POSTs:
    - ``{package_name}-{major}``: latest version of each service for a major line
    - ``{service}``: version -> commit history, grouped by major version

    Nothing is retried. If the second write fails the first one stays in
    place; the store is left half-updated until the next successful stamp.

    Failures come back as ``Err`` values and are not printed here; callers
    report them with ``print_versioning_error``.
    """

    def __init__(
        self,
        *,
        config: VersionerConfig,
        http: HttpClient,
        files: FileReader,
        console: ConsoleProtocol,
        argv: Sequence[str] | None = None,
        cwd: Path | None = None,
    ) -> None:
        self._config = config
        self._http = http
        self._files = files
        self._console = console
        self._argv = argv
        self._cwd = cwd

    def _input_from_argv(self) -> VersionInput:
        return VersionInput.from_mapping(parse_argv(self._argv))

    def stamp(self, data: VersionInput | None = None) -> Result[bool, VersioningError]:
        """Tag the build. ``Ok(False)`` means skipped, ``Ok(True)`` means both writes landed."""
        if data is None:
            data = self._input_from_argv()

        reason = skip_reason(data, release_prefix=self._config.release_prefix)
        if reason is not None:
            self._console.debug(reason)
            return Ok(False)

        root = data.root or self._cwd or Path.cwd()
        manifest = load_manifest(root, self._files)
        if isinstance(manifest, Err):
            return manifest

        resolved = resolve_request(
            data,
            manifest.value,
            root=root,
            default_package_name=self._config.default_package_name,
        )
        if isinstance(resolved, Err):
            return resolved
        request = resolved.value

        self._console.info(
            f"Saving remote configuration: {request.package_key} "
            f"(service: {request.service}, version: {request.version})"
        )
        latest = self._upsert(
            "latest", request.package_key, request.latest_body(), token=request.token
        )
        if isinstance(latest, Err):
            return latest
        self._console.success(
            f"Service {request.service} tagged at version: {request.version} "
            "in latest release pipeline"
        )

        self._console.info(
            f"Saving service {request.service} commit ref {request.commit} "
            f"for version {request.version}"
        )
        history = self._upsert(
            "history", request.service, request.history_body(), token=request.token
        )
        if isinstance(history, Err):
            self._console.warning(
                f"{request.package_key} already points at {request.version}; "
                "re-run the stamp to update the service history"
            )
            return history
        self._console.success(
            f"Service {request.service} tagged version: {request.version} "
            "in microservice release pipeline"
        )
        return Ok(True)

    def resolve(self, data: VersionInput) -> Result[VersionRequest | None, VersioningError]:
        """Resolve ``data`` without writing anything; ``Ok(None)`` if it would be skipped."""
        if skip_reason(data, release_prefix=self._config.release_prefix) is not None:
            return Ok(None)
        root = data.root or self._cwd or Path.cwd()
        manifest = load_manifest(root, self._files)
        if isinstance(manifest, Err):
            return manifest
        return resolve_request(
            data,
            manifest.value,
            root=root,
            default_package_name=self._config.default_package_name,
        )

    def read(self, data: VersionInput | None = None) -> Result[dict[str, Any], VersioningError]:
        """Fetch the current document stored under the requested package name."""
        if data is None:
            data = self._input_from_argv()

        resolved = resolve_read_request(data)
        if isinstance(resolved, Err):
            return resolved
        request = resolved.value

        url = self._config.url_for(request.package_name)
        result = self._http.get_json(url, headers={"Authorization": request.token})
        if isinstance(result, Err):
            error = result.error
            return Err(RemoteReadError(url=error.url, status=error.status, message=error.message))
        return Ok(result.value)

    def _upsert(
        self,
        step: UpsertStep,
        key: str,
        body: dict[str, object],
        *,
        token: str,
    ) -> Result[None, RemoteUpsertError]:
        url = self._config.url_for(key)
        result = self._http.post_json(
            url,
            body,
            headers={"Content-Type": "application/json", "Authorization": token},
        )
        if isinstance(result, Err):
            error = result.error
            return Err(
                RemoteUpsertError(
                    step=step, url=error.url, status=error.status, message=error.message
                )
            )
        return Ok(None)
