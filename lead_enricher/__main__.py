"""CLI entry point for the Lead Enricher."""

import argparse
import asyncio
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Any

from lead_enricher.config import settings
from lead_enricher.models import EnrichmentProfile
from lead_enricher.services import open_services

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


async def run_enrichment(records: list[dict[str, Any]], output_path: Path) -> list:
    """Enrich the records and export the profiles."""
    services = open_services(settings)
    try:
        result = await services.batch.enrich_batch(records)
    finally:
        await services.close()

    for item in result.items:
        if item.profile is None:
            logger.warning(f"Record {item.index + 1} rejected: {item.error}")

    profiles = result.profiles
    if profiles:
        logger.info(f"Exporting {len(profiles)} profiles to {output_path}...")
        export_to_csv(profiles, output_path)

    print_summary(profiles, rejected=result.failed)
    return profiles


def export_to_csv(profiles: list[EnrichmentProfile], output_path: Path):
    """Export profiles to a CSV file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)

        writer.writerow([
            "Company",
            "Phone",
            "Location",
            "Industry",
            "Lead Score",
            "Confidence",
            "Website",
            "Emails",
            "Founders",
            "Social Media",
            "Sources",
            "Error",
        ])

        for p in sorted(profiles, key=lambda p: p.lead_score, reverse=True):
            writer.writerow([
                p.company_name,
                p.phone or "",
                p.location,
                p.industry or "",
                p.lead_score,
                f"{p.confidence_score:.2f}",
                p.website or "",
                "; ".join(e.address for e in p.emails),
                "; ".join(f"{f.name} ({f.position})" for f in p.founders),
                "; ".join(p.social_media.values()),
                ", ".join(p.sources),
                p.enrichment_error or "",
            ])


def print_summary(profiles: list[EnrichmentProfile], rejected: int = 0):
    """Print a summary of results to console."""
    print("\n" + "=" * 60)
    print("LEAD ENRICHMENT - RESULTS SUMMARY")
    print("=" * 60)

    print(f"\nCompanies enriched: {len(profiles)}")
    print(f"Rejected or failed: {rejected}")

    if profiles:
        print("\n" + "-" * 60)
        print("TOP LEADS")
        print("-" * 60)

        ranked = sorted(profiles, key=lambda p: p.lead_score, reverse=True)
        for p in ranked[:10]:
            print(f"\n{p.company_name}")
            print(f"   Score: {p.lead_score} | Confidence: {p.confidence_score:.2f}")
            if p.industry:
                print(f"   Industry: {p.industry}")
            if p.emails:
                print(f"   Email: {p.emails[0].address}")
            if p.founders:
                print(f"   Founder: {p.founders[0].name} ({p.founders[0].position})")

    print("\n" + "=" * 60)


def load_companies(input_path: Path) -> list[dict[str, Any]]:
    """Load company records from a JSON or CSV file."""
    if input_path.suffix.lower() == ".csv":
        with open(input_path, newline="", encoding="utf-8") as f:
            return [dict(row) for row in csv.DictReader(f)]

    with open(input_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("companies", [])
    return data


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Lead Enricher - Enrich business leads with contacts and scores"
    )
    parser.add_argument(
        "--input", "-i",
        type=Path,
        help="Path to a JSON or CSV file of companies",
    )
    parser.add_argument("--name", "-n", help="Enrich a single company by name")
    parser.add_argument("--phone", help="Phone of the single company")
    parser.add_argument("--location", help="Location of the single company")
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=settings.data_dir / "enriched_leads.csv",
        help="Output CSV path (default: data/enriched_leads.csv)",
    )
    parser.add_argument(
        "--provider",
        choices=["synthetic", "duckduckgo", "none"],
        help="Discovery provider (default from DISCOVERY_PROVIDER)",
    )
    parser.add_argument(
        "--memory-only",
        action="store_true",
        help="Skip cache and database side effects",
    )
    parser.add_argument(
        "--delay",
        type=float,
        help="Seconds to wait between companies (default from BATCH_DELAY_SECONDS)",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP API instead of a one-off enrichment",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.provider:
        settings.discovery_provider = args.provider
    if args.memory_only:
        settings.memory_only = True
    if args.delay is not None:
        settings.batch_delay_seconds = args.delay

    if args.serve:
        import uvicorn

        uvicorn.run("lead_enricher.api.main:app", host=settings.host, port=settings.port)
        return

    if args.name:
        records = [{
            "company_name": args.name,
            "phone": args.phone,
            "location": args.location,
        }]
    elif args.input:
        if not args.input.exists():
            logger.error(f"Input file not found: {args.input}")
            sys.exit(1)
        try:
            records = load_companies(args.input)
            logger.info(f"Loaded {len(records)} companies from {args.input}")
        except Exception as e:
            logger.error(f"Failed to load companies: {e}")
            sys.exit(1)
    else:
        parser.error("one of --input, --name or --serve is required")

    try:
        asyncio.run(run_enrichment(records, args.output))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Enrichment failed: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
