"""Tests for email pattern generation."""

import pytest
from pydantic import ValidationError

from lead_enricher.config import Settings
from lead_enricher.enrich.emails import (
    UNRANKED_PRIORITY,
    EmailPatternGenerator,
    find_contact_emails,
)
from lead_enricher.models import EmailSource


class TestEmailPatternGenerator:
    """Tests for candidate email generation."""

    def test_generates_top_five_in_priority_order(self):
        generator = EmailPatternGenerator()
        emails = generator.find_contact_emails("Tacos El Buen Sabor")
        assert [e.address for e in emails] == [
            "contacto@tacoselbuensabor.com.mx",
            "info@tacoselbuensabor.com.mx",
            "ventas@tacoselbuensabor.com.mx",
            "administracion@tacoselbuensabor.com.mx",
            "gerencia@tacoselbuensabor.com.mx",
        ]
        assert [e.priority for e in emails] == [1, 2, 3, 4, 5]

    def test_confidence_bonuses(self):
        generator = EmailPatternGenerator()
        emails = {e.address.split("@")[0]: e for e in generator.find_contact_emails("Tacos El Buen Sabor")}
        # 0.5 base + 0.3 name match + 0.2 preferred + 0.1 .com.mx, clamped
        assert emails["contacto"].confidence == 1.0
        assert emails["info"].confidence == 1.0
        # 0.5 base + 0.3 name match + 0.1 .com.mx
        assert emails["ventas"].confidence == pytest.approx(0.9)

    def test_known_website_without_name_match(self):
        generator = EmailPatternGenerator()
        emails = generator.find_contact_emails("Tacos El Buen Sabor", "https://www.otrodominio.com")
        assert emails[0].address == "contacto@otrodominio.com"
        assert emails[0].confidence == pytest.approx(0.7)
        assert emails[2].confidence == pytest.approx(0.5)

    def test_short_name_matches_whole_name(self):
        generator = EmailPatternGenerator()
        emails = generator.find_contact_emails("Bimbo")
        assert emails[2].address == "ventas@bimbo.com.mx"
        assert emails[2].confidence == pytest.approx(0.9)

    def test_top_n_limit(self):
        generator = EmailPatternGenerator(top_n=3)
        emails = generator.find_contact_emails("Tacos El Buen Sabor")
        assert len(emails) == 3

    def test_empty_name_returns_nothing(self):
        generator = EmailPatternGenerator()
        assert generator.find_contact_emails("") == []
        assert generator.find_contact_emails("   ") == []

    def test_custom_local_parts_drive_priority_and_bonus(self):
        generator = EmailPatternGenerator(local_parts=["ventas", "contacto", "info"])
        emails = generator.find_contact_emails("Tacos El Buen Sabor")
        assert [e.address.split("@")[0] for e in emails] == ["ventas", "contacto", "info"]
        assert emails[0].confidence == 1.0
        assert emails[2].confidence == pytest.approx(0.9)

    def test_sorted_by_priority_then_confidence(self):
        generator = EmailPatternGenerator(top_n=5)
        emails = generator.find_contact_emails("Panadería La Esperanza")
        keys = [(e.priority, -e.confidence) for e in emails]
        assert keys == sorted(keys)

    def test_candidates_are_unvalidated_patterns(self):
        emails = find_contact_emails("Tacos El Buen Sabor")
        assert emails
        for email in emails:
            assert email.source == EmailSource.PATTERN_GENERATION
            assert email.validated is False
            assert 0.0 <= email.confidence <= 1.0

    def test_unranked_local_part(self):
        generator = EmailPatternGenerator()
        assert generator.priority_of("contacto") == 1
        assert generator.priority_of("soporte") == UNRANKED_PRIORITY


class TestTopNBounds:
    """Tests for the 3-5 candidate limit."""

    @pytest.mark.parametrize("top_n", [0, 2, 6, 10])
    def test_generator_rejects_out_of_range(self, top_n):
        with pytest.raises(ValueError):
            EmailPatternGenerator(top_n=top_n)

    @pytest.mark.parametrize("top_n", [3, 4, 5])
    def test_generator_accepts_range(self, top_n):
        emails = EmailPatternGenerator(top_n=top_n).find_contact_emails("Tacos El Buen Sabor")
        assert len(emails) == top_n

    def test_settings_reject_out_of_range(self):
        with pytest.raises(ValidationError):
            Settings(email_top_n=10)
        with pytest.raises(ValidationError):
            Settings(email_top_n=2)
        assert Settings(email_top_n=3).email_top_n == 3
