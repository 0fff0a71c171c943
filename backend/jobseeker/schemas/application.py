from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ApplicationStatus(str, Enum):
    PENDING = "Pending"
    REVIEWING = "Reviewing"
    INTERVIEWING = "Interviewing"
    DECISION = "Decision"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class Application(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(alias="userId")
    job_id: str = Field(alias="jobId")
    job_title: str = Field("", alias="jobTitle")
    company: str = ""
    location: str = ""
    salary: str = ""
    status: ApplicationStatus = ApplicationStatus.PENDING
    applied_at: str = Field(alias="appliedAt")

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "Application":
        return cls.model_validate({**data, "id": doc_id})


class ApplicationStats(BaseModel):
    total: int
    pending: int
    accepted: int
    rejected: int
    by_status: dict[str, int]
