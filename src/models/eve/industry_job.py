"""EVE Online industry job data models."""

from datetime import datetime

from pydantic import BaseModel, Field


class EveIndustryJob(BaseModel):
    """Represents an industry job from ESI.

    Industry jobs include manufacturing, research, invention, and reaction jobs.
    """

    job_id: int = Field(..., description="Unique job ID")
    installer_id: int = Field(..., description="Character who installed")
    facility_id: int = Field(..., description="Structure/station ID")
    location_id: int | None = Field(
        None, description="Location of the facility (corporation jobs)"
    )
    activity_id: int = Field(
        ..., description="Activity type (1=manufacturing, 3=research_time, etc.)"
    )
    blueprint_id: int = Field(..., description="Blueprint item ID")
    blueprint_type_id: int = Field(..., description="Blueprint type")
    runs: int = Field(..., ge=1, description="Number of runs")
    cost: float | None = Field(None, description="Job cost")
    product_type_id: int | None = Field(
        None, description="Output type (if manufacturing)"
    )
    status: str = Field(..., description="active, paused, ready, delivered, cancelled")
    start_date: datetime | None = Field(None, description="When started")
    end_date: datetime | None = Field(None, description="When finishes")

    @property
    def output_type_id(self) -> int:
        """Type the job produces; the blueprint itself for non-manufacturing jobs."""
        if self.product_type_id is not None:
            return self.product_type_id
        return self.blueprint_type_id

    @property
    def job_location_id(self) -> int:
        """Where the job runs. Corporation jobs report it separately from the facility."""
        if self.location_id is not None:
            return self.location_id
        return self.facility_id
