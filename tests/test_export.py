"""Tests for export format resolution and the capture audio policy."""

from clipsplice.export import (
    DEFAULT_EXPORT_TYPE,
    _parse_ffmpeg_listing,
    ffmpeg_supports,
    parse_mime_codecs,
    resolve_capture_audio_policy,
    resolve_export_format,
    supported_by_ffmpeg,
)


class TestResolveExportFormat:
    def test_normalizes_mime_types(self):
        settings = resolve_export_format("video/webm;codecs=vp9")
        assert settings.mime_type == "video/webm;codecs=vp9"
        assert settings.base_type == "video/webm"
        assert settings.extension == "webm"

    def test_supported_request_is_kept(self):
        settings = resolve_export_format("video/webm;codecs=vp9", is_supported=lambda m: True)
        assert settings.mime_type == "video/webm;codecs=vp9"

    def test_unsupported_request_falls_back(self):
        settings = resolve_export_format("video/webm;codecs=vp9", is_supported=lambda m: False)
        assert settings.mime_type == "video/webm"
        assert settings.base_type == "video/webm"
        assert settings.extension == "webm"

    def test_empty_hint_uses_default(self):
        assert resolve_export_format("").mime_type == DEFAULT_EXPORT_TYPE
        assert resolve_export_format(None).mime_type == DEFAULT_EXPORT_TYPE
        assert resolve_export_format(42).mime_type == DEFAULT_EXPORT_TYPE

    def test_extension_independent_of_codec(self):
        assert resolve_export_format("video/mp4;codecs=avc1").extension == "webm"


class TestCaptureAudioPolicy:
    def test_keeps_audio_but_silences_playback(self):
        policy = resolve_capture_audio_policy()
        assert policy.muted is False
        assert policy.volume == 0


class TestParseMimeCodecs:
    def test_plain_type(self):
        assert parse_mime_codecs("video/webm") == ("video/webm", [])

    def test_quoted_codec_list(self):
        assert parse_mime_codecs('video/webm; codecs="vp8, opus"') == ("video/webm", ["vp8", "opus"])

    def test_other_params_ignored(self):
        assert parse_mime_codecs("video/webm;rate=30;codecs=vp9") == ("video/webm", ["vp9"])


class TestSupportedByFfmpeg:
    MUXERS = {"webm", "mp4"}
    ENCODERS = {"libvpx-vp9", "libopus"}

    def test_container_only(self):
        assert supported_by_ffmpeg("video/webm", self.MUXERS, self.ENCODERS)

    def test_available_codecs(self):
        assert supported_by_ffmpeg("video/webm;codecs=vp9,opus", self.MUXERS, self.ENCODERS)
        assert supported_by_ffmpeg("video/webm;codecs=vp09.00.10.08", self.MUXERS, self.ENCODERS)

    def test_missing_encoder(self):
        assert not supported_by_ffmpeg("video/webm;codecs=vp8", self.MUXERS, self.ENCODERS)

    def test_unknown_codec(self):
        assert not supported_by_ffmpeg("video/webm;codecs=h265", self.MUXERS, self.ENCODERS)

    def test_unmapped_container(self):
        assert not supported_by_ffmpeg("video/x-matroska", self.MUXERS, self.ENCODERS)

    def test_missing_muxer(self):
        assert not supported_by_ffmpeg("video/webm", {"mp4"}, self.ENCODERS)


class TestParseFfmpegListing:
    def test_reads_names_after_separator(self):
        output = (
            "Encoders:\n"
            " V..... = Video\n"
            " A..... = Audio\n"
            " ------\n"
            " V....D libvpx-vp9           libvpx VP9 (codec vp9)\n"
            " A....D libopus              libopus Opus (codec opus)\n"
        )
        assert _parse_ffmpeg_listing(output) == {"libvpx-vp9", "libopus"}


class TestFfmpegSupports:
    def test_bundled_ffmpeg_can_mux_webm(self):
        assert ffmpeg_supports("video/webm")

    def test_unknown_container_rejected(self):
        assert not ffmpeg_supports("application/x-unknown")

    def test_usable_as_host_check(self):
        settings = resolve_export_format("application/x-unknown", is_supported=ffmpeg_supports)
        assert settings.mime_type == DEFAULT_EXPORT_TYPE
