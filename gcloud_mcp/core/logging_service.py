"""
Cloud Logging API service.
"""
from typing import List, Optional

from gcloud_mcp.core.api_clients import ApiService


class LoggingService(ApiService):
    """
    Read-only access to Cloud Logging: entries, log names, buckets, views,
    sinks and log scopes.
    """

    def list_log_entries(
        self,
        resource_names: List[str],
        filter: Optional[str] = None,
        order_by: str = "timestamp asc",
        page_size: int = 50,
        page_token: Optional[str] = None,
    ) -> str:
        """
        List log entries.

        Args:
            resource_names: Parent resources to search (e.g. ['projects/my-project'])
            filter: Logging query language filter
            order_by: "timestamp asc" or "timestamp desc"
            page_size: Maximum number of results
            page_token: Token from a previous call

        Returns:
            str: Log entries as JSON
        """
        body = {
            'resourceNames': resource_names,
            'filter': filter,
            'orderBy': order_by,
            'pageSize': page_size,
            'pageToken': page_token,
        }
        body = {k: v for k, v in body.items() if v is not None}
        return self.execute(
            "list log entries",
            lambda: self.factory.get_logging_client().entries().list(body=body),
            field='entries',
            default=[],
        )

    def list_log_names(self, parent: str, page_size: Optional[int] = None, page_token: Optional[str] = None) -> str:
        """List the names of logs that have entries under parent."""
        return self.execute(
            "list log names",
            lambda: self.factory.get_logging_client().projects().logs().list(
                parent=parent, pageSize=page_size, pageToken=page_token
            ),
            field='logNames',
            default=[],
        )

    def list_buckets(self, parent: str, page_size: Optional[int] = None, page_token: Optional[str] = None) -> str:
        """List log buckets under parent (projects/[PROJECT_ID]/locations/[LOCATION_ID])."""
        return self.execute(
            "list log buckets",
            lambda: self.factory.get_logging_client().projects().locations().buckets().list(
                parent=parent, pageSize=page_size, pageToken=page_token
            ),
            field='buckets',
            default=[],
        )

    def list_views(self, parent: str, page_size: Optional[int] = None, page_token: Optional[str] = None) -> str:
        """List views on a log bucket."""
        return self.execute(
            "list log views",
            lambda: self.factory.get_logging_client().projects().locations().buckets().views().list(
                parent=parent, pageSize=page_size, pageToken=page_token
            ),
            field='views',
            default=[],
        )

    def list_sinks(self, parent: str, page_size: Optional[int] = None, page_token: Optional[str] = None) -> str:
        return self.execute(
            "list log sinks",
            lambda: self.factory.get_logging_client().projects().sinks().list(
                parent=parent, pageSize=page_size, pageToken=page_token
            ),
            field='sinks',
            default=[],
        )

    def list_log_scopes(self, parent: str, page_size: Optional[int] = None, page_token: Optional[str] = None) -> str:
        return self.execute(
            "list log scopes",
            lambda: self.factory.get_logging_client().projects().locations().logScopes().list(
                parent=parent, pageSize=page_size, pageToken=page_token
            ),
            field='logScopes',
            default=[],
        )
