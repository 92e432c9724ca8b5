import pytest

from inline_diagnostics.config import DEFAULT_DISPLAY_DELAY, DEFAULT_PREFIX, InlineConfig
from inline_diagnostics.runtime import telemetry
from inline_diagnostics.severity import Severity


def test_defaults() -> None:
    config = InlineConfig()

    assert config.prefix == DEFAULT_PREFIX == "~> "
    assert config.display_error_id is True
    assert config.display_delay == DEFAULT_DISPLAY_DELAY
    assert config.auto_show is False


def test_from_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INLINE_DIAGNOSTICS_PREFIX", ">> ")
    monkeypatch.setenv("INLINE_DIAGNOSTICS_DISPLAY_ERROR_ID", "0")
    monkeypatch.setenv("INLINE_DIAGNOSTICS_DELAY", "0.25")
    monkeypatch.setenv("INLINE_DIAGNOSTICS_AUTO_SHOW", "yes")

    config = InlineConfig.from_env()

    assert config.prefix == ">> "
    assert config.display_error_id is False
    assert config.display_delay == 0.25
    assert config.auto_show is True


def test_from_env_keeps_base_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PREFIX", "DISPLAY_ERROR_ID", "DELAY", "AUTO_SHOW"):
        monkeypatch.delenv(f"INLINE_DIAGNOSTICS_{name}", raising=False)
    base = InlineConfig(prefix="* ", display_error_id=False)

    assert InlineConfig.from_env(base) == base


def test_configure_rejects_conflicting_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")
    with pytest.raises(ValueError):
        telemetry.configure(preset="loud")


def test_span_collects_metadata() -> None:
    with telemetry.span(
        "test::span", component=True, metadata={"surface": "main.py", "row": 3}
    ) as handle:
        handle.add_metadata("shown", 1)

    assert handle.component_name == "test::span"
    assert handle.metadata == {"surface": "main.py", "row": "3", "shown": "1"}


def test_span_reraises_failures() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("test::failing"):
            raise RuntimeError("boom")


def test_config_is_hashable_and_merges_partial_styles() -> None:
    config = InlineConfig(styles={Severity.ERROR: "red"})

    assert hash(InlineConfig()) == hash(InlineConfig())
    assert config.style_for("E") == "red"
    assert config.style_for("warning") == "inline.warning"
    assert config.style_for(Severity.NOTE) == "inline.note"
    assert InlineConfig(styles={"w": "yellow"}).style_for(Severity.WARNING) == "yellow"
    with pytest.raises(TypeError):
        config.styles[Severity.NOTE] = "blue"  # type: ignore[index]
