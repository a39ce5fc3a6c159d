"""
Factory for Google Cloud REST API clients used by the observability tools.
"""
import json
import logging
from typing import Any, Optional

import google.oauth2.credentials
from google.oauth2 import service_account
from googleapiclient import discovery

from gcloud_mcp.core.gcloud import print_access_token

logger = logging.getLogger(__name__)

CLOUD_PLATFORM_SCOPE = 'https://www.googleapis.com/auth/cloud-platform'


class ApiClientFactory:
    """
    Builds discovery clients for Logging, Monitoring, Error Reporting and Trace.

    Clients are built per call so that gcloud access tokens stay fresh.
    """

    def __init__(self, credentials_path: Optional[str] = None):
        """
        Args:
            credentials_path: Service account JSON file. When omitted, the
                active gcloud account is used.
        """
        self.credentials_path = credentials_path

    def credentials(self):
        if self.credentials_path:
            return service_account.Credentials.from_service_account_file(
                self.credentials_path,
                scopes=[CLOUD_PLATFORM_SCOPE]
            )
        return google.oauth2.credentials.Credentials(token=print_access_token())

    def _build(self, service: str, version: str):
        logger.debug(f"Building {service} {version} client")
        return discovery.build(service, version, credentials=self.credentials(), cache_discovery=False)

    def get_logging_client(self):
        return self._build('logging', 'v2')

    def get_monitoring_client(self):
        return self._build('monitoring', 'v3')

    def get_prometheus_client(self):
        # The Prometheus HTTP API lives in Monitoring v1.
        return self._build('monitoring', 'v1')

    def get_error_reporting_client(self):
        return self._build('clouderrorreporting', 'v1beta1')

    def get_trace_client(self):
        return self._build('cloudtrace', 'v1')


class ObservabilityApiError(Exception):
    """Raised when a Google Cloud API request fails."""


class ApiService:
    """
    Base for services that call a Google Cloud API and return JSON text.
    """

    def __init__(self, factory: ApiClientFactory):
        self.factory = factory

    def execute(self, action: str, build_request, field: Optional[str] = None, default: Any = None) -> str:
        """
        Execute a request and serialize part of the response.

        Args:
            action: Description used in error messages (e.g. "list log names")
            build_request: Callable returning an executable API request
            field: Response field to return; the whole response when omitted
            default: Value used when the field is absent or empty (default {})

        Returns:
            str: The selected response data as indented JSON
        """
        try:
            response = build_request().execute()
        except Exception as e:
            logger.error(f"Failed to {action}: {e}")
            raise ObservabilityApiError(f"Failed to {action}: {e}") from e

        data = response if field is None else response.get(field)
        if not data:
            data = {} if default is None else default
        return json.dumps(data, indent=2)
