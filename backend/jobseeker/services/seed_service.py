import logging
from datetime import datetime, timedelta, timezone

from jobseeker.schemas.job import SeedResponse
from jobseeker.services.document_store import DocumentStore, DocumentStoreError

logger = logging.getLogger(__name__)

SAMPLE_JOBS = [
    {
        "id": "job1",
        "title": "Software Engineer",
        "company": "Tech Solutions Lanka",
        "location": "Colombo, Sri Lanka",
        "salary": "LKR 150,000 - 200,000",
        "category": "Development",
        "type": "Full-time",
        "level": "Mid-Level",
        "description": "We are looking for a skilled Software Engineer to join our dynamic team and "
                       "contribute to the full software development lifecycle.",
        "requirements": [
            "2+ years of experience in software development",
            "Proficiency in JavaScript, React, or similar technologies",
            "Strong problem-solving skills",
        ],
        "benefits": ["Health insurance", "Flexible hours"],
    },
    {
        "id": "job2",
        "title": "UI/UX Designer",
        "company": "Creative Hub",
        "location": "Kandy, Sri Lanka",
        "salary": "LKR 100,000 - 150,000",
        "category": "Design",
        "type": "Full-time",
        "level": "Junior",
        "description": "Join our creative team as a UI/UX Designer creating intuitive designs for "
                       "web and mobile applications.",
        "requirements": ["Experience with Figma or Adobe XD", "Strong design portfolio"],
    },
    {
        "id": "job3",
        "title": "Mobile App Developer",
        "company": "AppWorks Sri Lanka",
        "location": "Galle, Sri Lanka",
        "salary": "LKR 120,000 - 180,000",
        "category": "Development",
        "type": "Full-time",
        "level": "Junior",
        "description": "Build cross-platform mobile applications using React Native.",
        "requirements": ["1+ years of React Native experience", "Experience with REST APIs"],
    },
    {
        "id": "job4",
        "title": "Data Analyst",
        "company": "Analytics Pro",
        "location": "Colombo, Sri Lanka",
        "salary": "LKR 130,000 - 160,000",
        "category": "Finance",
        "type": "Full-time",
        "level": "Mid-Level",
        "description": "Analyze large datasets and create insightful reports that drive decisions.",
        "requirements": ["Proficiency in SQL and Excel", "Experience with data visualization tools"],
    },
    {
        "id": "job5",
        "title": "DevOps Engineer",
        "company": "CloudTech Lanka",
        "location": "Remote",
        "salary": "LKR 200,000 - 280,000",
        "category": "Engineering",
        "type": "Remote",
        "level": "Senior",
        "description": "Build and maintain our cloud infrastructure and CI/CD pipelines.",
        "requirements": ["Experience with AWS, Azure, or GCP", "Knowledge of Docker and Kubernetes"],
    },
    {
        "id": "job6",
        "title": "Frontend Developer",
        "company": "WebCraft",
        "location": "Colombo, Sri Lanka",
        "salary": "LKR 100,000 - 140,000",
        "category": "Development",
        "type": "Part-time",
        "level": "Entry",
        "description": "Create responsive and engaging web interfaces.",
        "requirements": ["Strong HTML, CSS, and JavaScript skills", "Experience with React or Vue.js"],
    },
    {
        "id": "job7",
        "title": "Digital Marketing Executive",
        "company": "BrandBoost",
        "location": "Negombo, Sri Lanka",
        "salary": "LKR 80,000 - 110,000",
        "category": "Marketing",
        "type": "Full-time",
        "level": "Entry",
        "description": "Plan and run social media and search campaigns for local brands.",
        "requirements": ["Experience with social media advertising", "Good written English"],
    },
    {
        "id": "job8",
        "title": "Sales Coordinator",
        "company": "Lanka Traders",
        "location": "Kurunegala, Sri Lanka",
        "salary": "Negotiable",
        "category": "Sales",
        "type": "Contract",
        "level": "Junior",
        "description": "Coordinate the regional sales team and keep customer accounts up to date.",
    },
]


async def seed_jobs(documents: DocumentStore) -> SeedResponse:
    """Write the sample listings into the Jobs collection, newest first."""
    now = datetime.now(timezone.utc)
    try:
        for offset, job in enumerate(SAMPLE_JOBS):
            fields = {k: v for k, v in job.items() if k != "id"}
            fields["postedAt"] = (now - timedelta(days=offset)).isoformat()
            await documents.set_document("Jobs", job["id"], fields)
    except DocumentStoreError as exc:
        logger.error("Error seeding jobs: %s", exc)
        return SeedResponse(success=False, error=str(exc))
    logger.info("Seeded %d sample jobs", len(SAMPLE_JOBS))
    return SeedResponse(success=True, count=len(SAMPLE_JOBS))
