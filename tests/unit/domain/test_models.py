"""Unit tests for domain enums and models."""

import dataclasses

import pytest

from transcode_planner.domain import (
    EncoderChoice,
    EncoderFamily,
    FileState,
    GateDecision,
    GateReason,
    HdrPassthrough,
    HDRType,
)
from transcode_planner.tools.encoders import GPU_FALLBACK_ORDER


class TestEncoderFamily:
    """Tests for EncoderFamily properties."""

    def test_encoder_names(self):
        """Each family maps to its ffmpeg encoder."""
        assert EncoderFamily.NVENC_HEVC.encoder_name == "hevc_nvenc"
        assert EncoderFamily.QSV_HEVC.encoder_name == "hevc_qsv"
        assert EncoderFamily.SOFTWARE_X265.encoder_name == "libx265"

    def test_is_hardware(self):
        """Only the software family is not hardware."""
        assert EncoderFamily.NVENC_HEVC.is_hardware
        assert EncoderFamily.QSV_HEVC.is_hardware
        assert not EncoderFamily.SOFTWARE_X265.is_hardware


class TestFileState:
    """Tests for FileState terminal detection."""

    @pytest.mark.parametrize(
        "state",
        [FileState.SKIPPED, FileState.ACCEPTED, FileState.REVERTED, FileState.FAILED],
    )
    def test_terminal_states(self, state):
        """Skipped, accepted, reverted and failed are terminal."""
        assert state.is_terminal

    @pytest.mark.parametrize(
        "state",
        [
            FileState.PROBED,
            FileState.PLANNED,
            FileState.PLAN_READY,
            FileState.AWAITING_EXTERNAL_ENCODE,
        ],
    )
    def test_non_terminal_states(self, state):
        """In-flight states are not terminal."""
        assert not state.is_terminal


class TestEncoderChoice:
    """Tests for EncoderChoice."""

    def test_remaining_fallbacks_after_qsv(self):
        """Only software remains after QSV in the GPU chain."""
        choice = EncoderChoice(
            family=EncoderFamily.QSV_HEVC,
            candidates=GPU_FALLBACK_ORDER,
            fallback_occurred=True,
        )
        assert choice.remaining_fallbacks == (EncoderFamily.SOFTWARE_X265,)
        assert choice.encoder == "hevc_qsv"
        assert choice.encoder_type == "hardware"

    def test_software_has_no_remaining_fallbacks(self):
        """Software is always the end of the chain."""
        choice = EncoderChoice(
            family=EncoderFamily.SOFTWARE_X265, candidates=GPU_FALLBACK_ORDER
        )
        assert choice.remaining_fallbacks == ()
        assert choice.encoder_type == "software"

    def test_is_frozen(self):
        """EncoderChoice cannot be mutated."""
        choice = EncoderChoice(
            family=EncoderFamily.SOFTWARE_X265, candidates=GPU_FALLBACK_ORDER
        )
        with pytest.raises(dataclasses.FrozenInstanceError):
            choice.family = EncoderFamily.NVENC_HEVC


class TestHdrPassthrough:
    """Tests for HDR type detection."""

    def test_pq_is_hdr10(self):
        """smpte2084 transfer is HDR10."""
        hdr = HdrPassthrough("bt2020", "smpte2084", "bt2020nc")
        assert hdr.hdr_type is HDRType.HDR10

    def test_hlg(self):
        """arib-std-b67 transfer is HLG."""
        hdr = HdrPassthrough("bt2020", "arib-std-b67", "bt2020nc")
        assert hdr.hdr_type is HDRType.HLG

    def test_sdr_transfer(self):
        """bt709 transfer is not HDR."""
        hdr = HdrPassthrough("bt709", "bt709", "bt709")
        assert hdr.hdr_type is HDRType.NONE


class TestMediaProbe:
    """Tests for MediaProbe."""

    def test_pixel_count(self, make_probe):
        """Pixel count is width times height."""
        assert make_probe(width=1280, height=720).pixel_count == 921_600


class TestGateDecision:
    """Tests for GateDecision."""

    def test_quality_verified_only_for_verified_reason(self):
        """Unverified acceptance is not reported as verified."""
        verified = GateDecision(True, GateReason.QUALITY_VERIFIED, -40.0, 0.97)
        unverified = GateDecision(True, GateReason.QUALITY_UNVERIFIED, -40.0)
        assert verified.quality_verified
        assert not unverified.quality_verified
