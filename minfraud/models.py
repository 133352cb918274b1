"""Pydantic models for reporting minFraud results."""

from pydantic import BaseModel, Field

from .response import Response


class RiskSummary(BaseModel):
    maxmind_id: str = ""
    risk_score: float = Field(default=0.0, ge=0, le=100)
    distance: str = ""
    country_code: str = ""
    ip_city: str = ""
    ip_region: str = ""
    ip_latitude: str = ""
    ip_longitude: str = ""
    high_risk_country: bool = False
    anonymous_proxy: bool = False
    corporate_proxy: bool = False
    warning: str | None = None

    @classmethod
    def from_response(cls, response: Response) -> "RiskSummary":
        return cls(
            maxmind_id=response.maxmind_id,
            risk_score=response.risk_score,
            distance=response.distance,
            country_code=response.country_code,
            ip_city=response.ip_city,
            ip_region=response.ip_region,
            ip_latitude=response.ip_latitude,
            ip_longitude=response.ip_longitude,
            high_risk_country=response.high_risk_country,
            anonymous_proxy=response.anonymous_proxy,
            corporate_proxy=response.corporate_proxy,
            warning=response.warning or None,
        )
