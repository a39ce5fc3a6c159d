from typing import Optional
from pydantic import BaseModel, Field


class GcloudResult(BaseModel):
    """Model representing the outcome of a gcloud invocation."""
    code: Optional[int] = None
    stdout: str = ""
    stderr: str = ""

    def to_text(self) -> str:
        # See https://cloud.google.com/sdk/docs/scripting-gcloud#best_practices
        text = f"gcloud process exited with code {self.code}. stdout:\n{self.stdout}"
        if self.stderr:
            text += f"\nstderr:\n{self.stderr}"
        return text


class TimeInterval(BaseModel):
    """Model representing a Cloud Monitoring time interval."""
    end_time: str = Field(alias="endTime")
    start_time: Optional[str] = Field(default=None, alias="startTime")

    model_config = {"populate_by_name": True}


class Aggregation(BaseModel):
    """Model representing a Cloud Monitoring aggregation."""
    alignment_period: Optional[str] = Field(default=None, alias="alignmentPeriod")
    per_series_aligner: Optional[str] = Field(default=None, alias="perSeriesAligner")

    model_config = {"populate_by_name": True}


class ToolErrorDetail(BaseModel):
    """Model representing an error returned as tool output."""
    name: str
    message: str
