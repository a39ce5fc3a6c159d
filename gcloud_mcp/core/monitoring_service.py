"""
Cloud Monitoring API service, including the Prometheus query API.
"""
from typing import Optional

from gcloud_mcp.core.api_clients import ApiService
from gcloud_mcp.models.models import Aggregation, TimeInterval

PROMETHEUS_LOCATION = 'global'


class MonitoringService(ApiService):
    """
    Read-only access to metric descriptors, time series, alert policies
    and PromQL range queries.
    """

    def list_metric_descriptors(
        self,
        name: str,
        filter: Optional[str] = None,
        page_size: Optional[int] = None,
        page_token: Optional[str] = None,
    ) -> str:
        """
        List metric descriptors.

        Args:
            name: The project to query (projects/[PROJECT_ID])
            filter: Monitoring filter selecting descriptors
            page_size: Maximum number of results
            page_token: Token from a previous call

        Returns:
            str: Metric descriptors as JSON
        """
        return self.execute(
            "list metric descriptors",
            lambda: self.factory.get_monitoring_client().projects().metricDescriptors().list(
                name=name, filter=filter, pageSize=page_size, pageToken=page_token
            ),
            field='metricDescriptors',
            default=[],
        )

    def list_time_series(
        self,
        name: str,
        filter: str,
        interval: TimeInterval,
        aggregation: Optional[Aggregation] = None,
        page_size: Optional[int] = None,
        page_token: Optional[str] = None,
    ) -> str:
        """
        List time series data.

        Args:
            name: The project to query (projects/[PROJECT_ID])
            filter: Monitoring filter selecting the time series
            interval: Time interval to read; end_time is required
            aggregation: Optional alignment of the series
            page_size: Maximum number of results
            page_token: Token from a previous call

        Returns:
            str: Time series as JSON
        """
        params = {
            'name': name,
            'filter': filter,
            'interval_startTime': interval.start_time,
            'interval_endTime': interval.end_time,
            'pageSize': page_size,
            'pageToken': page_token,
        }
        if aggregation:
            params['aggregation_alignmentPeriod'] = aggregation.alignment_period
            params['aggregation_perSeriesAligner'] = aggregation.per_series_aligner

        return self.execute(
            "list time series",
            lambda: self.factory.get_monitoring_client().projects().timeSeries().list(**params),
            field='timeSeries',
            default=[],
        )

    def list_alert_policies(
        self,
        name: str,
        filter: Optional[str] = None,
        order_by: Optional[str] = None,
        page_size: Optional[int] = None,
        page_token: Optional[str] = None,
    ) -> str:
        """List alert policies in a project."""
        return self.execute(
            "list alert policies",
            lambda: self.factory.get_monitoring_client().projects().alertPolicies().list(
                name=name, filter=filter, orderBy=order_by, pageSize=page_size, pageToken=page_token
            ),
            field='alertPolicies',
            default=[],
        )

    def query_range(
        self,
        name: str,
        query: str,
        start: Optional[str] = None,
        end: Optional[str] = None,
        step: Optional[str] = None,
    ) -> str:
        """
        Evaluate a PromQL query over a time range.

        Args:
            name: The project to query (projects/[PROJECT_ID])
            query: PromQL expression
            start: Range start, RFC 3339 or Unix timestamp
            end: Range end, RFC 3339 or Unix timestamp
            step: Resolution step (e.g. "1m")

        Returns:
            str: The query response as JSON
        """
        body = {
            'query': query,
            'start': start,
            'end': end,
            'step': step,
        }
        return self.execute(
            "query range",
            lambda: self.factory.get_prometheus_client().projects().location().prometheus().api().v1().query_range(
                name=name, location=PROMETHEUS_LOCATION, body=body
            ),
        )
