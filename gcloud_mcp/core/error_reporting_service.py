"""
Error Reporting API service.
"""
from typing import Optional

from gcloud_mcp.core.api_clients import ApiService


class ErrorReportingService(ApiService):

    def list_group_stats(
        self,
        project_name: str,
        time_range_period: Optional[str] = None,
        order: Optional[str] = None,
        page_size: Optional[int] = None,
        page_token: Optional[str] = None,
    ) -> str:
        """
        List error group statistics.

        Args:
            project_name: The project (projects/[PROJECT_ID])
            time_range_period: PERIOD_1_HOUR, PERIOD_6_HOURS, PERIOD_1_DAY, PERIOD_1_WEEK or PERIOD_30_DAYS
            order: COUNT_DESC, LAST_SEEN_DESC, CREATED_DESC or AFFECTED_USERS_DESC
            page_size: Maximum number of results
            page_token: Token from a previous call

        Returns:
            str: Error group stats as JSON
        """
        return self.execute(
            "list group stats",
            lambda: self.factory.get_error_reporting_client().projects().groupStats().list(
                projectName=project_name,
                timeRange_period=time_range_period,
                order=order,
                pageSize=page_size,
                pageToken=page_token,
            ),
            field='errorGroupStats',
            default=[],
        )
