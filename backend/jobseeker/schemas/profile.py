from pydantic import BaseModel, ConfigDict, Field


class UserProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    uid: str
    name: str = ""
    email: str = ""
    phone: str = ""
    profile_pic: str = Field("", alias="profilePic")
    resume_url: str | None = Field(None, alias="resumeUrl")
    resume_name: str | None = Field(None, alias="resumeName")
    skills: list[str] = []
    created_at: str | None = Field(None, alias="createdAt")


class ProfileUpdate(BaseModel):
    name: str | None = None
    phone: str | None = None


class SkillRequest(BaseModel):
    skill: str


class ProfileStats(BaseModel):
    applications: int
    saved: int


class UploadResult(BaseModel):
    success: bool
    url: str | None = None
    error: str | None = None
