"""
MCP Tools for Cloud Observability.
This module registers Logging, Monitoring, Trace and Error Reporting tools.
"""
import logging
from typing import List, Literal, Optional

from gcloud_mcp.core.api_clients import ApiClientFactory
from gcloud_mcp.core.error_reporting_service import ErrorReportingService
from gcloud_mcp.core.logging_service import LoggingService
from gcloud_mcp.core.monitoring_service import MonitoringService
from gcloud_mcp.core.trace_service import TraceService
from gcloud_mcp.handler.tool_wrapper import run_tool
from gcloud_mcp.models.models import Aggregation, TimeInterval

logger = logging.getLogger(__name__)


class ObservabilityTools:
    """
    Collection of Cloud Observability tools for MCP.
    """

    def __init__(self, factory: ApiClientFactory, mcp):
        """
        Initialize with an API client factory and MCP instance.

        Args:
            factory: Builds the Google Cloud API clients
            mcp: MCP instance for registering tools
        """
        self.logging_service = LoggingService(factory)
        self.monitoring_service = MonitoringService(factory)
        self.trace_service = TraceService(factory)
        self.error_reporting_service = ErrorReportingService(factory)
        self.mcp = mcp
        self.register_tools()

    def register_tools(self):
        """Register all observability tools with MCP."""
        self.register_logging_tools()
        self.register_monitoring_tools()
        self.register_trace_tools()
        self.register_error_reporting_tools()
        logger.debug("Observability tools registered")

    def register_logging_tools(self):
        service = self.logging_service

        @self.mcp.tool()
        async def list_log_entries(
            resource_names: List[str],
            filter: Optional[str] = None,
            order_by: Literal["timestamp asc", "timestamp desc"] = "timestamp asc",
            page_size: int = 50,
            page_token: Optional[str] = None,
        ) -> str:
            """
            Use this as the primary tool to search and retrieve log entries from Google Cloud Logging.
            It's essential for debugging application behavior, finding specific error messages, or auditing events.

            Args:
                resource_names: Parent resources to read from, e.g. 'projects/[PROJECT_ID]' or a log view
                    'projects/[PROJECT_ID]/locations/[LOCATION_ID]/buckets/[BUCKET_ID]/views/[VIEW_ID]'. At most 100.
                filter: Logging query language filter, e.g. 'severity="ERROR"' or
                    'timestamp >= "2025-01-01T00:00:00Z" AND textPayload:"connection failed"'
                order_by: "timestamp desc" returns the newest entries first; recommended for recent logs
                page_size: Maximum number of results (default 50)
                page_token: next_page_token from a previous call
            """
            return await run_tool(lambda: service.list_log_entries(
                resource_names, filter, order_by, page_size, page_token
            ))

        @self.mcp.tool()
        async def list_log_names(parent: str, page_size: int = 50, page_token: Optional[str] = None) -> str:
            """
            List the log names in a Google Cloud project. Only logs which have entries are listed.

            Args:
                parent: The parent resource, e.g. "projects/[PROJECT_ID]"
                page_size: Maximum number of results
                page_token: nextPageToken from a previous call
            """
            return await run_tool(lambda: service.list_log_names(parent, page_size, page_token))

        @self.mcp.tool()
        async def list_buckets(parent: str, page_size: Optional[int] = None, page_token: Optional[str] = None) -> str:
            """
            List the log buckets of a project, which store and route log entries.

            Args:
                parent: "projects/[PROJECT_ID]/locations/[LOCATION_ID]"; use "-" as location for all locations
                page_size: Maximum number of results
                page_token: nextPageToken from a previous call
            """
            return await run_tool(lambda: service.list_buckets(parent, page_size, page_token))

        @self.mcp.tool()
        async def list_views(parent: str, page_size: Optional[int] = None, page_token: Optional[str] = None) -> str:
            """
            List the log views of a log bucket.

            Args:
                parent: "projects/[PROJECT_ID]/locations/[LOCATION_ID]/buckets/[BUCKET_ID]"
                page_size: Maximum number of results
                page_token: nextPageToken from a previous call
            """
            return await run_tool(lambda: service.list_views(parent, page_size, page_token))

        @self.mcp.tool()
        async def list_sinks(parent: str, page_size: Optional[int] = None, page_token: Optional[str] = None) -> str:
            """
            List the log sinks of a project, which export logs to other destinations.

            Args:
                parent: "projects/[PROJECT_ID]"
                page_size: Maximum number of results
                page_token: nextPageToken from a previous call
            """
            return await run_tool(lambda: service.list_sinks(parent, page_size, page_token))

        @self.mcp.tool()
        async def list_log_scopes(parent: str, page_size: Optional[int] = None, page_token: Optional[str] = None) -> str:
            """
            List log scopes, which group log views across projects.

            Args:
                parent: "projects/[PROJECT_ID]/locations/[LOCATION_ID]"
                page_size: Maximum number of results
                page_token: nextPageToken from a previous call
            """
            return await run_tool(lambda: service.list_log_scopes(parent, page_size, page_token))

    def register_monitoring_tools(self):
        service = self.monitoring_service

        @self.mcp.tool()
        async def list_metric_descriptors(
            name: str,
            filter: Optional[str] = None,
            page_size: Optional[int] = None,
            page_token: Optional[str] = None,
        ) -> str:
            """
            List the metric types available in a project. Use this to discover metrics before reading time series.

            Args:
                name: "projects/[PROJECT_ID]"
                filter: e.g. 'metric.type = starts_with("compute.googleapis.com")'
                page_size: Maximum number of results
                page_token: nextPageToken from a previous call
            """
            return await run_tool(lambda: service.list_metric_descriptors(name, filter, page_size, page_token))

        @self.mcp.tool()
        async def list_time_series(
            name: str,
            filter: str,
            end_time: str,
            start_time: Optional[str] = None,
            alignment_period: Optional[str] = None,
            per_series_aligner: Optional[str] = None,
            page_size: Optional[int] = None,
            page_token: Optional[str] = None,
        ) -> str:
            """
            Read time series data for a metric over a time interval.

            Args:
                name: "projects/[PROJECT_ID]"
                filter: Must select exactly one metric type, e.g. 'metric.type = "compute.googleapis.com/instance/cpu/utilization"'
                end_time: End of the interval, RFC 3339
                start_time: Start of the interval, RFC 3339
                alignment_period: Alignment period, e.g. "60s"
                per_series_aligner: e.g. ALIGN_MEAN, ALIGN_RATE
                page_size: Maximum number of results
                page_token: nextPageToken from a previous call
            """
            interval = TimeInterval(end_time=end_time, start_time=start_time)
            aggregation = None
            if alignment_period or per_series_aligner:
                aggregation = Aggregation(
                    alignment_period=alignment_period,
                    per_series_aligner=per_series_aligner,
                )
            return await run_tool(lambda: service.list_time_series(
                name, filter, interval, aggregation, page_size, page_token
            ))

        @self.mcp.tool()
        async def list_alert_policies(
            name: str,
            filter: Optional[str] = None,
            order_by: Optional[str] = None,
            page_size: Optional[int] = None,
            page_token: Optional[str] = None,
        ) -> str:
            """
            List the alerting policies of a project.

            Args:
                name: "projects/[PROJECT_ID]"
                filter: e.g. 'display_name = "High CPU"'
                order_by: Comma separated fields, e.g. "display_name"
                page_size: Maximum number of results
                page_token: nextPageToken from a previous call
            """
            return await run_tool(lambda: service.list_alert_policies(name, filter, order_by, page_size, page_token))

        @self.mcp.tool()
        async def query_range(
            name: str,
            query: str,
            start: Optional[str] = None,
            end: Optional[str] = None,
            step: Optional[str] = None,
        ) -> str:
            """
            Evaluate a PromQL query over a time range using Google Cloud Managed Service for Prometheus.

            Args:
                name: "projects/[PROJECT_ID]"
                query: PromQL expression
                start: Start of the range, RFC 3339 or Unix timestamp
                end: End of the range, RFC 3339 or Unix timestamp
                step: Query resolution, e.g. "1m"
            """
            return await run_tool(lambda: service.query_range(name, query, start, end, step))

    def register_trace_tools(self):
        service = self.trace_service

        @self.mcp.tool()
        async def list_traces(
            project_id: str,
            filter: Optional[str] = None,
            order_by: Optional[str] = None,
            page_size: Optional[int] = None,
            page_token: Optional[str] = None,
            start_time: Optional[str] = None,
            end_time: Optional[str] = None,
        ) -> str:
            """
            List traces in a project. Only root spans are returned; use get_trace for the full trace.

            Args:
                project_id: The project ID
                filter: e.g. "latency:500ms" or "+root:/api"
                order_by: trace_id, name, duration or start, optionally with " desc"
                page_size: Maximum number of results
                page_token: nextPageToken from a previous call
                start_time: Start of the window, RFC 3339
                end_time: End of the window, RFC 3339
            """
            return await run_tool(lambda: service.list_traces(
                project_id, filter, order_by, page_size, page_token, start_time, end_time
            ))

        @self.mcp.tool()
        async def get_trace(project_id: str, trace_id: str) -> str:
            """
            Get a single trace with all of its spans.

            Args:
                project_id: The project ID
                trace_id: The trace ID
            """
            return await run_tool(lambda: service.get_trace(project_id, trace_id))

    def register_error_reporting_tools(self):
        service = self.error_reporting_service

        @self.mcp.tool()
        async def list_group_stats(
            project_name: str,
            time_range_period: Optional[str] = None,
            order: Optional[str] = None,
            page_size: Optional[int] = None,
            page_token: Optional[str] = None,
        ) -> str:
            """
            List groups of reported errors with their counts. Useful to find the most frequent errors.

            Args:
                project_name: "projects/[PROJECT_ID]"
                time_range_period: PERIOD_1_HOUR, PERIOD_6_HOURS, PERIOD_1_DAY, PERIOD_1_WEEK or PERIOD_30_DAYS
                order: COUNT_DESC, LAST_SEEN_DESC, CREATED_DESC or AFFECTED_USERS_DESC
                page_size: Maximum number of results
                page_token: nextPageToken from a previous call
            """
            return await run_tool(lambda: service.list_group_stats(
                project_name, time_range_period, order, page_size, page_token
            ))
