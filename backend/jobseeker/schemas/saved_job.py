from pydantic import BaseModel, ConfigDict, Field


class SavedJob(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(alias="userId")
    job_id: str = Field(alias="jobId")
    job_title: str = Field("", alias="jobTitle")
    company: str = ""
    saved_at: str = Field(alias="savedAt")


class SaveToggleResponse(BaseModel):
    saved: bool
