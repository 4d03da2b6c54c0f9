"""Tests for CLI input loading and CSV export."""

import csv
import json

from lead_enricher.__main__ import export_to_csv, load_companies
from lead_enricher.models import EmailCandidate, EnrichmentProfile


def make_profile(name: str, score: int) -> EnrichmentProfile:
    """Create a test profile."""
    return EnrichmentProfile(
        company_name=name,
        location="Puebla",
        industry="general",
        emails=[EmailCandidate(address="contacto@ejemplo.com.mx", confidence=0.8, priority=1)],
        lead_score=score,
        confidence_score=0.5,
        sources=["email_generation"],
    )


class TestLoadCompanies:
    def test_json_list(self, tmp_path):
        path = tmp_path / "companies.json"
        path.write_text(json.dumps([{"company_name": "Tacos El Buen Sabor"}]), encoding="utf-8")
        assert load_companies(path) == [{"company_name": "Tacos El Buen Sabor"}]

    def test_json_object_with_companies_key(self, tmp_path):
        path = tmp_path / "companies.json"
        path.write_text(json.dumps({"companies": [{"nombre": "Panadería La Esperanza"}]}), encoding="utf-8")
        assert load_companies(path) == [{"nombre": "Panadería La Esperanza"}]

    def test_csv(self, tmp_path):
        path = tmp_path / "companies.csv"
        path.write_text("nombre,telefono,ciudad\nFerretería López,5512345678,Puebla\n", encoding="utf-8")
        assert load_companies(path) == [
            {"nombre": "Ferretería López", "telefono": "5512345678", "ciudad": "Puebla"},
        ]


class TestExportToCsv:
    def test_rows_sorted_by_score(self, tmp_path):
        path = tmp_path / "out" / "leads.csv"
        export_to_csv([make_profile("Baja", 30), make_profile("Alta", 90)], path)

        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))

        assert rows[0][0] == "Company"
        assert [row[0] for row in rows[1:]] == ["Alta", "Baja"]
        assert rows[1][4] == "90"
        assert rows[1][7] == "contacto@ejemplo.com.mx"
