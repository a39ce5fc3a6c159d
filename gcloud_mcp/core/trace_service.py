"""
Cloud Trace API service.
"""
from typing import Optional

from gcloud_mcp.core.api_clients import ApiService

# MINIMAL is not useful and COMPLETE can overwhelm the agent.
TRACE_VIEW = 'ROOTSPAN'


class TraceService(ApiService):

    def list_traces(
        self,
        project_id: str,
        filter: Optional[str] = None,
        order_by: Optional[str] = None,
        page_size: Optional[int] = None,
        page_token: Optional[str] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
    ) -> str:
        """
        List traces in a project, root spans only.

        Args:
            project_id: The project ID
            filter: Trace filter (e.g. "latency:1s")
            order_by: Sort field, e.g. "duration desc"
            page_size: Maximum number of results
            page_token: Token from a previous call
            start_time: Start of the time window, RFC 3339
            end_time: End of the time window, RFC 3339

        Returns:
            str: Traces as JSON
        """
        return self.execute(
            "list traces",
            lambda: self.factory.get_trace_client().projects().traces().list(
                projectId=project_id,
                filter=filter,
                orderBy=order_by,
                pageSize=page_size,
                pageToken=page_token,
                startTime=start_time,
                endTime=end_time,
                view=TRACE_VIEW,
            ),
            field='traces',
            default=[],
        )

    def get_trace(self, project_id: str, trace_id: str) -> str:
        """Get a single trace with all of its spans."""
        return self.execute(
            "get trace",
            lambda: self.factory.get_trace_client().projects().traces().get(
                projectId=project_id, traceId=trace_id
            ),
        )
