from conftest import make_pdf


class TestProfile:
    def test_get_profile(self, client, signed_in):
        r = client.get("/api/v1/profile")
        assert r.status_code == 200
        data = r.json()
        assert data["uid"] == signed_in["identity"]["uid"]
        assert data["email"] == "nimal@example.com"
        assert data["skills"] == []

    def test_update_profile(self, client, signed_in):
        r = client.put("/api/v1/profile", json={"name": "Nimal Silva", "phone": "+94771234567"})
        assert r.status_code == 200
        assert r.json()["name"] == "Nimal Silva"
        assert r.json()["phone"] == "+94771234567"
        assert client.get("/api/v1/session").json()["profile"]["name"] == "Nimal Silva"

    def test_update_rejects_bad_phone(self, client, signed_in):
        r = client.put("/api/v1/profile", json={"phone": "12345"})
        assert r.status_code == 400

    def test_update_rejects_blank_name(self, client, signed_in):
        r = client.put("/api/v1/profile", json={"name": "   "})
        assert r.status_code == 400

    def test_skills(self, client, signed_in):
        client.post("/api/v1/profile/skills", json={"skill": " Python "})
        r = client.post("/api/v1/profile/skills", json={"skill": "SQL"})
        assert r.json()["skills"] == ["Python", "SQL"]

        r = client.post("/api/v1/profile/skills", json={"skill": "Python"})
        assert r.json()["skills"] == ["Python", "SQL"]

        r = client.delete("/api/v1/profile/skills/Python")
        assert r.status_code == 200
        assert r.json()["skills"] == ["SQL"]

    def test_blank_skill(self, client, signed_in):
        r = client.post("/api/v1/profile/skills", json={"skill": "  "})
        assert r.status_code == 400

    def test_stats(self, client, seeded):
        client.post("/api/v1/jobs/job1/application")
        client.post("/api/v1/jobs/job2/save")
        client.post("/api/v1/jobs/job3/save")
        r = client.get("/api/v1/profile/stats")
        assert r.json() == {"applications": 1, "saved": 2}


class TestUploads:
    def test_upload_resume(self, client, signed_in, resume_pdf, tmp_data):
        uid = signed_in["identity"]["uid"]
        r = client.post(
            "/api/v1/profile/resume",
            files={"file": ("cv.pdf", resume_pdf, "application/pdf")},
        )
        assert r.status_code == 200
        data = r.json()
        assert data["success"] is True
        assert data["url"].endswith(f"/storage/resumes/{uid}/cv.pdf")
        assert (tmp_data / "storage" / "resumes" / uid / "cv.pdf").is_file()

        profile = client.get("/api/v1/profile").json()
        assert profile["resumeName"] == "cv.pdf"
        assert profile["resumeUrl"] == data["url"]

    def test_download_uploaded_resume(self, client, signed_in):
        uid = signed_in["identity"]["uid"]
        content = make_pdf("Download me")
        client.post("/api/v1/profile/resume", files={"file": ("cv.pdf", content, "application/pdf")})

        r = client.get(f"/storage/resumes/{uid}/cv.pdf")
        assert r.status_code == 200
        assert r.content == content

    def test_upload_rejects_non_pdf(self, client, signed_in):
        r = client.post(
            "/api/v1/profile/resume",
            files={"file": ("cv.pdf", b"just some text", "application/pdf")},
        )
        assert r.status_code == 400
        assert client.get("/api/v1/profile").json()["resumeName"] is None

    def test_upload_rejects_empty_file(self, client, signed_in):
        r = client.post("/api/v1/profile/resume", files={"file": ("cv.pdf", b"", "application/pdf")})
        assert r.status_code == 400

    def test_upload_too_large(self, client, signed_in, monkeypatch):
        from jobseeker.config import settings

        monkeypatch.setattr(settings, "max_upload_bytes", 16)
        r = client.post("/api/v1/profile/resume", files={"file": ("cv.pdf", make_pdf(), "application/pdf")})
        assert r.status_code == 413

    def test_delete_resume(self, client, signed_in, resume_pdf, tmp_data):
        uid = signed_in["identity"]["uid"]
        client.post("/api/v1/profile/resume", files={"file": ("cv.pdf", resume_pdf, "application/pdf")})

        r = client.delete("/api/v1/profile/resume")
        assert r.status_code == 200
        assert r.json()["success"] is True
        assert not (tmp_data / "storage" / "resumes" / uid / "cv.pdf").exists()
        profile = client.get("/api/v1/profile").json()
        assert profile["resumeName"] is None
        assert profile["resumeUrl"] is None

    def test_delete_without_resume(self, client, signed_in):
        assert client.delete("/api/v1/profile/resume").status_code == 404

    def test_upload_photo(self, client, signed_in):
        uid = signed_in["identity"]["uid"]
        r = client.post("/api/v1/profile/photo", files={"file": ("me.png", b"\x89PNG fake", "image/png")})
        assert r.status_code == 200
        assert r.json()["url"].endswith(f"/storage/profilePics/{uid}")
        assert client.get("/api/v1/profile").json()["profilePic"] == r.json()["url"]

    def test_photo_must_be_image(self, client, signed_in):
        r = client.post("/api/v1/profile/photo", files={"file": ("me.txt", b"hello", "text/plain")})
        assert r.status_code == 400

    def test_storage_rejects_traversal(self, client):
        assert client.get("/storage/../db.sqlite").status_code in (400, 404)

    def test_storage_requires_token(self, client, signed_in):
        uid = signed_in["identity"]["uid"]
        client.post("/api/v1/profile/resume", files={"file": ("cv.pdf", make_pdf(), "application/pdf")})
        client.headers.pop("Authorization")
        assert client.get(f"/storage/resumes/{uid}/cv.pdf").status_code == 401

    def test_storage_hides_other_users_objects(self, client, signed_in, tmp_data):
        other = tmp_data / "storage" / "resumes" / "someone-else"
        other.mkdir(parents=True)
        (other / "cv.pdf").write_bytes(make_pdf())
        assert client.get("/storage/resumes/someone-else/cv.pdf").status_code == 404
