"""
Tests for company request/response validation.
"""

from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from corphub.models.company import CompanyProfileCreate, CompanyProfileResponse, CompanyProfileUpdate


def _payload(**overrides):
    payload = {
        "company_name": "  Bluestock Fintech  ",
        "address": "Plot 12, Baner Road",
        "city": "Pune",
        "state": "Maharashtra",
        "country": "India",
        "postal_code": "411045",
        "industry": "Financial Technology",
    }
    payload.update(overrides)
    return payload


class TestCompanyProfileCreate:

    def test_valid_payload_is_trimmed(self):
        data = CompanyProfileCreate(**_payload())
        assert data.company_name == "Bluestock Fintech"
        assert data.website is None

    def test_name_characters(self):
        CompanyProfileCreate(**_payload(company_name="Smith & Sons, Ltd."))
        with pytest.raises(ValidationError):
            CompanyProfileCreate(**_payload(company_name="Evil <script>"))

    def test_length_limits(self):
        with pytest.raises(ValidationError):
            CompanyProfileCreate(**_payload(company_name="A"))
        with pytest.raises(ValidationError):
            CompanyProfileCreate(**_payload(address="abc"))
        with pytest.raises(ValidationError):
            CompanyProfileCreate(**_payload(description="x" * 1001))

    def test_place_names(self):
        CompanyProfileCreate(**_payload(city="St. Louis", state="Ile-de-France"))
        with pytest.raises(ValidationError):
            CompanyProfileCreate(**_payload(city="Pune 411"))

    def test_postal_code(self):
        CompanyProfileCreate(**_payload(postal_code="SW1A 1AA"))
        with pytest.raises(ValidationError):
            CompanyProfileCreate(**_payload(postal_code="12#45"))

    def test_website(self):
        data = CompanyProfileCreate(**_payload(website="https://bluestock.in/about"))
        assert data.website == "https://bluestock.in/about"
        assert CompanyProfileCreate(**_payload(website="")).website is None
        with pytest.raises(ValidationError):
            CompanyProfileCreate(**_payload(website="ftp://bluestock.in"))

    def test_founded_date_not_in_future(self):
        CompanyProfileCreate(**_payload(founded_date=date.today()))
        with pytest.raises(ValidationError):
            CompanyProfileCreate(**_payload(founded_date=date.today() + timedelta(days=1)))

    def test_social_links(self):
        data = CompanyProfileCreate(**_payload(social_links={"LinkedIn": " https://linkedin.com/company/b "}))
        assert data.social_links == {"linkedin": "https://linkedin.com/company/b"}
        with pytest.raises(ValidationError):
            CompanyProfileCreate(**_payload(social_links={"myspace": "https://myspace.com/b"}))
        with pytest.raises(ValidationError):
            CompanyProfileCreate(**_payload(social_links={"twitter": "not a url"}))

    def test_required_fields(self):
        payload = _payload()
        del payload["industry"]
        with pytest.raises(ValidationError):
            CompanyProfileCreate(**payload)


class TestCompanyProfileUpdate:

    def test_changes_only_contains_sent_fields(self):
        data = CompanyProfileUpdate(city=" Mumbai ")
        assert data.changes() == {"city": "Mumbai"}

    def test_explicit_null_is_kept_for_optional_fields(self):
        data = CompanyProfileUpdate(website=None)
        assert data.changes() == {"website": None}

    def test_company_name_cannot_be_null(self):
        with pytest.raises(ValidationError):
            CompanyProfileUpdate(company_name=None)

    def test_dates_stay_dates(self):
        data = CompanyProfileUpdate(founded_date="2010-05-01")
        assert data.changes()["founded_date"] == date(2010, 5, 1)


class TestCompanyProfileResponse:

    def _profile(self, **overrides):
        values = {
            "id": "p1",
            "owner_id": "u1",
            "company_name": "Bluestock",
            "address": None,
            "city": None,
            "state": None,
            "country": None,
            "postal_code": None,
            "website": None,
            "logo_url": None,
            "banner_url": None,
            "industry": None,
            "founded_date": None,
            "description": None,
            "social_links": None,
            "created_at": datetime(2024, 1, 1),
            "updated_at": datetime(2024, 1, 1),
            "owner_name": "Owner",
            "owner_email": "owner@example.com",
            "owner_mobile": None,
            "owner_email_verified": True,
            "owner_mobile_verified": False,
        }
        values.update(overrides)
        return SimpleNamespace(**values)

    def test_profile_completion_from_attributes(self):
        response = CompanyProfileResponse.model_validate(self._profile())
        assert response.profile_completion == 8  # 1 of 13
        assert response.owner_email == "owner@example.com"

    def test_profile_completion_full(self):
        full = self._profile(
            address="a", city="c", state="s", country="co", postal_code="p", website="w",
            logo_url="l", banner_url="b", industry="i", founded_date=date(2000, 1, 1),
            description="d", social_links={"website": "https://x.io"},
        )
        response = CompanyProfileResponse.model_validate(full)
        assert response.profile_completion == 100
        assert response.model_dump()["profile_completion"] == 100
