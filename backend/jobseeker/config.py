from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_path: Path = Path.home() / "JobSeeker"
    api_prefix: str = "/api/v1"
    storage_base_url: str = "http://127.0.0.1:8000/storage"
    min_password_length: int = 6
    # Salary insight looks at a bounded sample of same-category listings.
    salary_sample_size: int = 20
    salary_band: float = 0.10
    similar_jobs_limit: int = 5
    listings_cache_key: str = "@jobseeker_jobs"
    theme_cache_key: str = "@jobseeker_theme"
    max_upload_bytes: int = 10 * 1024 * 1024  # 10 MiB
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def db_path(self) -> Path:
        return self.data_path / "db.sqlite"

    @property
    def storage_dir(self) -> Path:
        return self.data_path / "storage"

    model_config = {"env_prefix": "JOBSEEKER_"}


settings = Settings()
