"""Formatters for plans, skips and gate decisions.

Shared by the plan and gate commands for human-readable and JSON output.
"""

import json
from typing import Any

from transcode_planner.domain.models import (
    EncodePlan,
    GateDecision,
    MediaProbe,
    PlanSkip,
)


def probe_to_dict(probe: MediaProbe) -> dict[str, Any]:
    return {
        "codec": probe.codec,
        "width": probe.width,
        "height": probe.height,
        "duration_seconds": probe.duration_seconds,
        "file_size_bytes": probe.file_size_bytes,
        "color_primaries": probe.color_primaries,
        "color_transfer": probe.color_transfer,
        "color_space": probe.color_space,
    }


def plan_to_dict(plan: EncodePlan) -> dict[str, Any]:
    """Convert an EncodePlan to a JSON-serializable dictionary."""
    data: dict[str, Any] = {
        "action": "encode",
        "encoder": {
            "family": plan.encoder.family.value,
            "name": plan.encoder.encoder,
            "type": plan.encoder.encoder_type,
            "fallback_occurred": plan.encoder.fallback_occurred,
            "remaining_fallbacks": [f.value for f in plan.encoder.remaining_fallbacks],
        },
        "mode": plan.mode.value,
        "target_codec": plan.target_codec,
        "quality_param": plan.quality_param,
        "speed_preset": plan.speed_preset.value,
        "container": plan.container,
        "profile": plan.profile,
        "copy_audio": plan.copy_audio,
        "copy_subtitles": plan.copy_subtitles,
        "two_pass": plan.two_pass,
        "requeue_after_encode": plan.requeue_after_encode,
        "fast_start": plan.fast_start,
        "map_all_streams": plan.map_all_streams,
        "hdr_passthrough": None,
        "bitrate": None,
        "info": plan.info_log,
    }
    if plan.hdr_passthrough is not None:
        hdr = plan.hdr_passthrough
        data["hdr_passthrough"] = {
            "primaries": hdr.primaries,
            "transfer": hdr.transfer,
            "space": hdr.space,
            "hdr_type": hdr.hdr_type.value,
        }
    if plan.bitrate is not None:
        data["bitrate"] = {
            "current_kbps": round(plan.bitrate.current_bitrate_kbps, 1),
            "target_kbps": plan.bitrate.target_bitrate_kbps,
            "resolution_base_quality": plan.bitrate.resolution_base_quality,
            "adjustment": plan.bitrate.adjustment,
            "final_quality_param": plan.bitrate.final_quality_param,
        }
    return data


def skip_to_dict(skip: PlanSkip) -> dict[str, Any]:
    return {"action": "skip", "reason": skip.reason.value, "detail": skip.detail}


def decision_to_dict(decision: GateDecision) -> dict[str, Any]:
    return {
        "accepted": decision.accepted,
        "reason": decision.reason.value,
        "size_delta_percent": round(decision.size_delta_percent, 2),
        "perceptual_score": decision.perceptual_score,
        "quality_verified": decision.quality_verified,
    }


def format_json(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2)


def format_plan_human(plan: EncodePlan) -> str:
    """Format an EncodePlan for terminal output."""
    lines = [
        f"Plan: {plan.info_log}",
        f"  Encoder:   {plan.encoder.encoder} ({plan.encoder.encoder_type})",
        f"  Quality:   {plan.quality_param}",
        f"  Preset:    {plan.speed_preset.value}",
        f"  Container: {plan.container}",
        f"  Two-pass:  {'yes' if plan.two_pass else 'no'}",
    ]
    if plan.encoder.fallback_occurred:
        lines.append("  Note:      hardware encoder unavailable, fell back")
    if plan.profile:
        lines.append(f"  Profile:   {plan.profile}")
    if plan.hdr_passthrough is not None:
        hdr = plan.hdr_passthrough
        lines.append(
            f"  HDR:       {hdr.hdr_type.value} "
            f"({hdr.primaries}/{hdr.transfer}/{hdr.space})"
        )
    if plan.bitrate is not None:
        b = plan.bitrate
        lines.append(
            f"  Bitrate:   {b.current_bitrate_kbps:.0f} kbps -> "
            f"{b.target_bitrate_kbps:.0f} kbps target"
        )
    return "\n".join(lines)


def format_skip_human(skip: PlanSkip) -> str:
    return f"Skip: {skip.reason.value} ({skip.detail})"


def format_decision_human(decision: GateDecision) -> str:
    """Format a GateDecision for terminal output."""
    verdict = "ACCEPT" if decision.accepted else "REVERT"
    lines = [
        f"Decision: {verdict} ({decision.reason.value})",
        f"  Size change: {decision.size_delta_percent:+.1f}%",
    ]
    if decision.perceptual_score is not None:
        lines.append(f"  Quality:     {decision.perceptual_score:.4f}")
    elif decision.accepted:
        lines.append("  Quality:     not measured (unverified)")
    return "\n".join(lines)
