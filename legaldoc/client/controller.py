"""
Client for the analysis service

AnalysisClient speaks HTTP to the backend. AnalysisController holds the
loading state of one interaction and hands results to the renderer.
"""
import logging
from typing import Any, Dict, Optional

import requests

from legaldoc.client.renderer import DisplaySettings, RenderedView, render_error, render_result

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_URL = "http://localhost:3000"


class AnalysisClient:
    def __init__(self, base_url: str = DEFAULT_BACKEND_URL, timeout: float = 60, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def analyze_text(self, text: str, query: Optional[str] = None) -> Dict[str, Any]:
        """POST /analyze, return the decoded JSON body whatever the status"""
        payload = {"text": text}
        if query:
            payload["query"] = query
        response = self.session.post(f"{self.base_url}/analyze", json=payload, timeout=self.timeout)
        return response.json()

    def analyze_document(
        self,
        filename: str,
        content: bytes,
        content_type: str,
        query: Optional[str] = None
    ) -> Dict[str, Any]:
        """POST /upload as multipart form data"""
        files = {"document": (filename, content, content_type)}
        data = {"query": query} if query else {}
        response = self.session.post(
            f"{self.base_url}/upload",
            files=files,
            data=data,
            timeout=self.timeout
        )
        return response.json()


class AnalysisController:
    """
    Drives one analysis panel: submits input, tracks the loading
    indicator and renders whatever comes back.
    """

    def __init__(self, client: AnalysisClient, settings: Optional[DisplaySettings] = None):
        self.client = client
        self.settings = settings or DisplaySettings()
        self.loading = False
        self.loading_message = ""
        self.view: Optional[RenderedView] = None

    def toggle_theme(self) -> DisplaySettings:
        self.settings = self.settings.toggled()
        return self.settings

    def submit_text(self, text: str, query: Optional[str] = None) -> Optional[RenderedView]:
        text = text.strip()
        if not text or self.loading:
            return None
        return self._run(
            "Analyzing legal text...",
            "Failed to analyze text. Please try again.",
            lambda: self.client.analyze_text(text, query),
        )

    def submit_document(
        self,
        filename: str,
        content: bytes,
        content_type: str,
        query: Optional[str] = None
    ) -> Optional[RenderedView]:
        if self.loading:
            return None
        return self._run(
            "Processing document...",
            "Failed to analyze document. Please try again.",
            lambda: self.client.analyze_document(filename, content, content_type, query),
        )

    def _run(self, loading_message: str, failure_message: str, send) -> RenderedView:
        self.loading = True
        self.loading_message = loading_message
        try:
            data = send()
            if not isinstance(data, dict):
                raise ValueError(f"Unexpected response body: {data!r}")
            if data.get("error"):
                self.view = render_error(data.get("message") or failure_message, self.settings)
            else:
                self.view = render_result(data, self.settings)
        except (requests.exceptions.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Analysis request failed: %s", e)
            self.view = render_error(failure_message, self.settings)
        finally:
            self.loading = False
            self.loading_message = ""
        return self.view
