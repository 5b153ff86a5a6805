"""Adapter calling an external HTTP analysis service."""

import logging
import time
from typing import Any, Dict

import requests

from drafting.config import AnalysisServiceConfig, analysis_config_from_env

from ...application.ports.analysis_service import AnalysisServicePort

logger = logging.getLogger(__name__)

RETRY_STATUS = (429, 500, 502, 503, 504)


class HttpAnalysisAdapter(AnalysisServicePort):
    """Adapter posting draft snapshots to the analysis service."""

    def __init__(
        self,
        config: AnalysisServiceConfig | None = None,
        session: requests.Session | None = None,
        backoff_s: float = 0.6,
    ):
        """Initialize with service configuration.

        Args:
            config: Service settings. If None, read from environment.
            session: Optional preconfigured requests session
            backoff_s: Base delay between retries
        """
        self._config = config or analysis_config_from_env()
        self._backoff_s = backoff_s
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "content-type": "application/json",
                "accept": "application/json",
            }
        )
        if self._config.api_key:
            self.session.headers.update({"x-api-key": self._config.api_key})

    def _backoff(self, attempt: int) -> None:
        # No wait after the final attempt
        if attempt < self._config.retries - 1:
            time.sleep(self._backoff_s * (attempt + 1))

    def request_analysis(self, snapshot: Dict[str, Any]) -> Dict[str, Any]:
        """Post the snapshot and return the decoded response body.

        Args:
            snapshot: Full draft snapshot

        Returns:
            Response JSON as returned by the service
        """
        if not self._config.url:
            raise ValueError("ANALYSIS_SERVICE_URL not configured")

        payload = {"draft": snapshot}
        last_err: Exception | None = None
        for attempt in range(self._config.retries):
            try:
                resp = self.session.post(self._config.url, json=payload, timeout=self._config.timeout_s)
            except requests.RequestException as exc:
                last_err = exc
                logger.warning(f"Analysis request attempt {attempt + 1} failed: {exc}")
                self._backoff(attempt)
                continue

            if resp.status_code in RETRY_STATUS:
                last_err = RuntimeError(f"Analysis service returned {resp.status_code}")
                logger.warning(f"Analysis request attempt {attempt + 1} failed: {last_err}")
                self._backoff(attempt)
                continue
            if resp.status_code >= 400:
                # Client errors are not retried
                raise RuntimeError(f"Analysis service returned {resp.status_code}")

            try:
                return resp.json()
            except ValueError as exc:
                last_err = exc
                logger.warning(f"Analysis request attempt {attempt + 1} returned invalid JSON: {exc}")
                self._backoff(attempt)

        raise RuntimeError(f"Failed after {self._config.retries} attempts. Last error: {last_err}")
