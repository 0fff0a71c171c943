"""
Salary insight for the job detail screen.

Salaries are free text ("LKR 150,000 - 200,000"). Each comma-grouped number
found is taken as a bound and the bounds are averaged into a midpoint. This is
a heuristic: currencies are ignored, numbers without a comma are invisible to
it, and "1,200,000" reads as 1,200.
"""
import re
from typing import Sequence

from jobseeker.config import settings
from jobseeker.schemas.job import Job, SalaryInsight
from jobseeker.services.document_store import DocumentStore, Where
from jobseeker.services.job_actions import jobs_from_snapshots

SALARY_PAIR_RE = re.compile(r"\d+,\d+")


def parse_salary_midpoint(salary: str | None) -> float | None:
    if not salary:
        return None
    matches = SALARY_PAIR_RE.findall(salary)
    if not matches:
        return None
    numbers = [int(m.replace(",", "", 1)) for m in matches]
    return sum(numbers) / len(numbers)


def compute_salary_insight(
    current: Job,
    sample: Sequence[Job],
    sample_size: int | None = None,
    band: float | None = None,
) -> SalaryInsight | None:
    sample_size = settings.salary_sample_size if sample_size is None else sample_size
    band = settings.salary_band if band is None else band
    if not current.category:
        return None

    same_category = [j for j in sample if j.category == current.category][:sample_size]
    midpoints = [m for m in (parse_salary_midpoint(j.salary) for j in same_category) if m]
    if not midpoints:
        return None
    current_midpoint = parse_salary_midpoint(current.salary)
    if current_midpoint is None:
        return None

    average = sum(midpoints) / len(midpoints)
    if current_midpoint > average * (1 + band):
        comparison = "higher"
    elif current_midpoint < average * (1 - band):
        comparison = "lower"
    else:
        comparison = "average"
    return SalaryInsight(average=average, comparison=comparison)


async def salary_insight_for(documents: DocumentStore, job: Job) -> SalaryInsight | None:
    if not job.category:
        return None
    snapshots = await documents.query_collection(
        "Jobs",
        [Where("category", "==", job.category)],
        limit=settings.salary_sample_size,
    )
    return compute_salary_insight(job, jobs_from_snapshots(snapshots))
