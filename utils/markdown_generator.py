"""Markdown summary report for a scoring run."""

import os
from collections import Counter
from datetime import datetime
from typing import Any, Dict, List, Sequence

import yaml

from models.property import ScoredProperty


class MarkdownGenerator:
    """Generator for the ranked summary.md with YAML frontmatter."""

    def __init__(self, output_dir: str = "output"):
        """
        Initialize the generator.

        Args:
            output_dir: Folder receiving summary.md
        """
        self.output_dir = output_dir

    def generate_yaml_frontmatter(
        self,
        run_timestamp: datetime,
        regions: Sequence[str],
        profile: str,
        scored_count: int,
        candidate_count: int,
    ) -> str:
        """Generate YAML frontmatter describing the run."""
        frontmatter: Dict[str, Any] = {
            "generated_at": run_timestamp.isoformat(timespec="seconds"),
            "regions": list(regions),
            "scoring_profile": profile,
            "candidates": candidate_count,
            "scored": scored_count,
        }
        return yaml.dump(
            frontmatter, allow_unicode=True, sort_keys=False, default_flow_style=False
        )

    def _format_row(self, rank: int, prop: ScoredProperty) -> str:
        transport = prop.transport
        transport_str = f"{transport.name} ({transport.duration} min)" if transport else "n/a"
        store_str = f"{prop.store.name} ({prop.store.duration} min)" if prop.store else "n/a"
        title = (prop.title or str(prop.id)).replace("|", "/")
        link = f"[{title}]({prop.url})" if prop.url else title

        return (
            f"| {rank} | {prop.total} | €{prop.price:,} | {prop.floor_area}m² | "
            f"{prop.ber} | {prop.property_type or 'n/a'} | {prop.distance:.1f} km | "
            f"{transport_str} | {store_str} | {link} |"
        )

    def generate_summary_content(
        self,
        top_properties: List[ScoredProperty],
        all_properties: List[ScoredProperty],
    ) -> str:
        """Markdown body: statistics and the ranked table of top properties."""
        total = len(all_properties)
        avg_score = sum(p.total for p in all_properties) / total if total else 0
        avg_ppsm = (
            sum(p.price_per_square_meter for p in all_properties) / total if total else 0
        )
        type_counts = Counter(p.property_type for p in all_properties if p.property_type)

        content = [
            "# Property Ranking",
            "",
            "## Statistics",
            "",
            f"- **Scored properties:** {total}",
            f"- **Average score:** {avg_score:.1f}",
            f"- **Average price per m²:** €{avg_ppsm:,.0f}",
            "",
        ]

        if type_counts:
            content.append("**Property types:**")
            for property_type, count in type_counts.most_common():
                content.append(f"- {property_type}: {count}")
            content.append("")

        content.extend([
            f"## Top {len(top_properties)} (sorted by score)",
            "",
            "| Rank | Score | Price | Area | BER | Type | Centre | Transport | Store | Listing |",
            "|------|-------|-------|------|-----|------|--------|-----------|-------|---------|",
        ])
        for rank, prop in enumerate(top_properties, 1):
            content.append(self._format_row(rank, prop))

        return "\n".join(content)

    def generate_summary_file(
        self,
        top_properties: List[ScoredProperty],
        all_properties: List[ScoredProperty],
        run_timestamp: datetime,
        regions: Sequence[str],
        profile: str,
        candidate_count: int,
        filename: str = "summary.md",
    ) -> str:
        """
        Write the summary report.

        Args:
            top_properties: Best properties, highest score first
            all_properties: Every scored property of the run
            run_timestamp: Start of the run
            regions: Regions scraped
            profile: Scoring profile name
            candidate_count: Listings considered before eligibility filtering
            filename: Report file name

        Returns:
            Path to the generated file
        """
        frontmatter = self.generate_yaml_frontmatter(
            run_timestamp, regions, profile, len(all_properties), candidate_count
        )
        body = self.generate_summary_content(top_properties, all_properties)

        filepath = os.path.join(self.output_dir, filename)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(f"---\n{frontmatter}---\n\n{body}\n")

        return filepath
