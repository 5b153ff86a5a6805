from __future__ import annotations

import argparse
import json
import math
import os
import tempfile
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from reportlab.lib import colors  # noqa: E402
from reportlab.lib.pagesizes import letter  # noqa: E402
from reportlab.lib.styles import getSampleStyleSheet  # noqa: E402
from reportlab.lib.units import inch  # noqa: E402
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle  # noqa: E402


SIDE_COLORS = {"blue": "#2a6fdb", "red": "#db5a2a"}


def _load_report(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _save_plot(fig, path: str) -> str:
    fig.tight_layout()
    fig.savefig(path, dpi=160)
    plt.close(fig)
    return path


def _plot_team_dna(report: Dict[str, Any], out_path: str) -> Optional[str]:
    teams = report.get("teams") or {}
    axes: List[str] = []
    for data in teams.values():
        for k in (data.get("analytics", {}).get("team_dna") or {}).keys():
            if k not in axes:
                axes.append(k)
    if not axes:
        return None

    fig = plt.figure(figsize=(6, 4))
    ax = fig.add_subplot(111, polar=True)
    angles = [n / float(len(axes)) * 2 * math.pi for n in range(len(axes))]
    angles += angles[:1]

    for side, data in teams.items():
        dna = data.get("analytics", {}).get("team_dna") or {}
        vals = [float(dna.get(a, 0) or 0) for a in axes]
        vals += vals[:1]
        color = SIDE_COLORS.get(side)
        ax.plot(angles, vals, linewidth=1.5, label=side.title(), color=color)
        ax.fill(angles, vals, alpha=0.1, color=color)

    ax.set_xticks(angles[:-1])
    ax.set_xticklabels(axes, fontsize=8)
    ax.set_title("Team DNA (Radar)")
    ax.legend(loc="upper right", bbox_to_anchor=(1.2, 1.1), fontsize=7)
    return _save_plot(fig, out_path)


def _plot_damage_profile(report: Dict[str, Any], out_path: str) -> Optional[str]:
    teams = report.get("teams") or {}
    if not teams:
        return None
    buckets = ["ad", "ap", "hybrid"]
    sides = list(teams.keys())
    width = 0.35

    fig, ax = plt.subplots(figsize=(6, 3))
    for i, side in enumerate(sides):
        damage = teams[side].get("analytics", {}).get("damage_profile") or {}
        xs = [b + i * width for b in range(len(buckets))]
        ax.bar(xs, [damage.get(b, 0) for b in buckets], width, label=side.title(), color=SIDE_COLORS.get(side))
    ax.set_xticks([b + width / 2 for b in range(len(buckets))])
    ax.set_xticklabels(["AD", "AP", "Hybrid"])
    ax.set_ylim(0, 5)
    ax.set_title("Damage Profile")
    ax.legend(loc="upper right", fontsize=8)
    return _save_plot(fig, out_path)


def _slots_table(data: Dict[str, Any]) -> Table:
    rows = [["Position", "Pick", "Ban"]]
    picks = data.get("picks") or []
    bans = data.get("bans") or []
    for i in range(max(len(picks), len(bans))):
        pick = picks[i] if i < len(picks) else {}
        ban = bans[i] if i < len(bans) else {}
        rows.append([pick.get("position") or "", pick.get("name") or "-", ban.get("name") or "-"])
    table = Table(rows, hAlign="LEFT")
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#e6eef9")),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
            ]
        )
    )
    return table


def build_pdf_from_report(report: Dict[str, Any], output_path: str) -> None:
    styles = getSampleStyleSheet()
    meta = report.get("meta", {})
    story: List[Any] = []

    story.append(Paragraph("Draft Report", styles["Title"]))
    story.append(
        Paragraph(
            f"Mode: <b>{meta.get('mode')}</b> | Status: <b>{meta.get('status')}</b> | "
            f"Turn <b>{meta.get('turn_index', 0)}</b> of {meta.get('total_turns', 0)}",
            styles["BodyText"],
        )
    )
    story.append(Spacer(1, 0.2 * inch))

    for side, data in (report.get("teams") or {}).items():
        analytics = data.get("analytics", {})
        cc = analytics.get("cc_score", {})
        engage = analytics.get("engage_score", {})
        story.append(Paragraph(f"{side.title()} Side", styles["Heading3"]))
        story.append(_slots_table(data))
        story.append(Spacer(1, 0.1 * inch))
        story.append(
            Paragraph(
                f"Crowd control: <b>{cc.get('value', 0)} ({cc.get('label')})</b>, "
                f"engage: <b>{engage.get('value', 0)} ({engage.get('label')})</b>.",
                styles["BodyText"],
            )
        )
        for alert in data.get("alerts") or []:
            story.append(
                Paragraph(
                    f"[{alert.get('type')}] <b>{escape(str(alert.get('title')))}</b>: {escape(str(alert.get('message')))}",
                    styles["BodyText"],
                )
            )
        story.append(Spacer(1, 0.2 * inch))

    with tempfile.TemporaryDirectory() as tmp:
        plots = [
            ("dna.png", _plot_team_dna, "Team DNA: archetype tags per display category, both sides."),
            ("damage.png", _plot_damage_profile, "Damage profile: AD, AP and hybrid picks per side."),
        ]
        for name, fn, caption in plots:
            path = os.path.join(tmp, name)
            img = fn(report, path)
            if img and os.path.exists(img):
                story.append(Paragraph(caption, styles["BodyText"]))
                story.append(Image(img, width=6.0 * inch, height=3.5 * inch))
                story.append(Spacer(1, 0.2 * inch))

        doc = SimpleDocTemplate(output_path, pagesize=letter)
        doc.build(story)


def build_pdf(input_path: str, output_path: str) -> None:
    build_pdf_from_report(_load_report(input_path), output_path)


def main() -> None:
    parser = argparse.ArgumentParser(description="Render draft report JSON to PDF.")
    parser.add_argument("--input", required=True, help="Path to report.json")
    parser.add_argument("--output", required=True, help="Path to output PDF")
    args = parser.parse_args()
    build_pdf(args.input, args.output)


if __name__ == "__main__":
    main()
