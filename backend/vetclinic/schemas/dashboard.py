from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from vetclinic.schemas.common import Number


class DashboardMetrics(BaseModel):
    """Headline numbers for the dashboard, serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    appointments_today: int = 0
    total_patients: int = 0
    avg_wait_time: Number = 0
    weekly_revenue: Number = 0
