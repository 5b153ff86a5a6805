from __future__ import annotations

from typing import Any, Dict, List


def _slot_line(slots: List[Dict[str, Any]], with_position: bool) -> List[str]:
    lines = []
    for s in slots:
        name = s.get("name") or "-"
        if with_position:
            lines.append(f"  {(s.get('position') or '').ljust(8)} {name}")
        else:
            lines.append(f"  {name}")
    return lines


def render_text(report: Dict[str, Any]) -> str:
    meta = report.get("meta", {})
    teams = report.get("teams", {})

    lines = []
    lines.append("DRAFT REPORT")
    lines.append(
        f"Mode: {meta.get('mode')} | Status: {meta.get('status')} | "
        f"Turn: {meta.get('turn_index', 0)}/{meta.get('total_turns', 0)}"
    )
    current = meta.get("current_turn")
    if current:
        lines.append(f"Next: {current.get('side')} {current.get('action')} ({current.get('phase')})")
    lines.append("")

    for side, data in teams.items():
        analytics = data.get("analytics", {})
        damage = analytics.get("damage_profile", {})
        cc = analytics.get("cc_score", {})
        engage = analytics.get("engage_score", {})

        lines.append(side.upper())
        lines.append("Picks")
        lines.extend(_slot_line(data.get("picks") or [], with_position=True))
        bans = [b.get("name") for b in data.get("bans") or [] if b.get("name")]
        lines.append("Bans: " + (", ".join(bans) if bans else "-"))
        lines.append(
            f"Damage AD/AP/Hybrid: {damage.get('ad', 0)}/{damage.get('ap', 0)}/{damage.get('hybrid', 0)} | "
            f"CC: {cc.get('value', 0)} ({cc.get('label')}) | "
            f"Engage: {engage.get('value', 0)} ({engage.get('label')})"
        )
        dna = analytics.get("team_dna") or {}
        lines.append("Team DNA: " + ", ".join(f"{k} {v}" for k, v in dna.items()))
        unmapped = analytics.get("unmapped_tags") or []
        if unmapped:
            lines.append("Unmapped tags: " + ", ".join(unmapped))
        for alert in data.get("alerts") or []:
            marker = "+" if alert.get("type") == "synergy" else "!"
            lines.append(f"  {marker} {alert.get('title')}: {alert.get('message')}")
        lines.append("")

    return "\n".join(lines).rstrip()
