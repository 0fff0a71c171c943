from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ALL = "All"

JOB_CATEGORIES = ["All", "Design", "Development", "Marketing", "Finance", "Engineering", "Sales"]


class Job(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    company: str
    location: str = ""
    salary: str = ""
    description: str = ""
    category: str | None = None
    job_type: str | None = Field(None, alias="type")
    level: str | None = None
    requirements: list[str] = []
    responsibilities: list[str] = []
    benefits: list[str] = []
    posted_at: str | None = Field(None, alias="postedAt")
    company_logo: str | None = Field(None, alias="companyLogo")

    @field_validator("location", "salary", "description", mode="before")
    @classmethod
    def _null_text(cls, value):
        return "" if value is None else value

    @field_validator("requirements", "responsibilities", "benefits", mode="before")
    @classmethod
    def _null_list(cls, value):
        return [] if value is None else value

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "Job":
        return cls.model_validate({**data, "id": doc_id})


class FilterState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    search_text: str = ""
    category: str = ALL
    job_type: str = Field(ALL, alias="type")
    level: str = ALL


class SalaryInsight(BaseModel):
    average: float
    comparison: Literal["higher", "lower", "average"]


class JobListResponse(BaseModel):
    jobs: list[Job]
    total: int
    status: str
    error: str | None = None


class JobDetailResponse(BaseModel):
    job: Job
    similar_jobs: list[Job] = []
    salary_insight: SalaryInsight | None = None
    is_applied: bool = False
    is_saved: bool = False
    share_text: str
    posted_label: str | None = None


class SeedResponse(BaseModel):
    success: bool
    count: int = 0
    error: str | None = None
