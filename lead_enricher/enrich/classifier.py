"""Keyword-based industry classification."""

import logging
from typing import Optional

from lead_enricher.models import GENERAL_INDUSTRY, WebResult

logger = logging.getLogger(__name__)


class IndustryClassifier:
    """Classify a company into an industry by keyword matching.

    First match wins: industries are checked in table order, so the order
    of ``INDUSTRY_KEYWORDS`` is the tie-break policy.
    """

    INDUSTRY_KEYWORDS = {
        "restaurante": [
            "taco", "comida", "restaurant", "cocina", "menu", "menú",
            "mariscos", "cafetería", "cafeteria", "antojitos",
        ],
        "panadería": [
            "pan", "panadería", "panaderia", "repostería", "reposteria",
            "pastel", "bollería",
        ],
        "construcción": [
            "construcción", "construccion", "constructora", "materiales",
            "obra", "arquitectura", "cemento",
        ],
        "tecnología": [
            "software", "tecnología", "tecnologia", "sistemas", "digital",
            "tech", "computación", "computacion",
        ],
        "servicios": [
            "servicio", "consultoría", "consultoria", "asesoría", "asesoria",
            "reparación", "reparacion", "despacho", "limpieza",
        ],
        "comercio": [
            "tienda", "abarrotes", "comercial", "comercializadora",
            "distribuidora", "venta", "boutique",
        ],
        "salud": [
            "clínica", "clinica", "médico", "medico", "salud", "farmacia",
            "dental", "hospital", "consultorio",
        ],
        "educación": [
            "escuela", "colegio", "educación", "educacion", "academia",
            "instituto", "universidad", "curso",
        ],
    }

    def __init__(self, industry_keywords: Optional[dict[str, list[str]]] = None):
        self.industry_keywords = industry_keywords or self.INDUSTRY_KEYWORDS

    def detect_industry(
        self,
        company_name: str,
        web_results: Optional[list[WebResult]] = None,
    ) -> str:
        """Return the first industry whose keywords appear in the name or snippets."""
        name_text = (company_name or "").lower()
        snippet_text = " ".join(r.snippet for r in web_results or []).lower()

        for industry, keywords in self.industry_keywords.items():
            for keyword in keywords:
                if keyword in name_text or keyword in snippet_text:
                    logger.debug(f"{company_name}: '{keyword}' -> {industry}")
                    return industry

        return GENERAL_INDUSTRY
