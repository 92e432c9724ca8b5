import pytest

from inline_diagnostics.config import InlineConfig
from inline_diagnostics.formatter import DiagnosticFormatter
from inline_diagnostics.host import Diagnostic
from inline_diagnostics.severity import SEVERITY_ALIASES, Severity


def make_diagnostic(**overrides: object) -> Diagnostic:
    fields: dict[str, object] = {
        "severity": "warning",
        "message": "unused variable 'x'",
        "begin": (3, 4),
    }
    fields.update(overrides)
    return Diagnostic(**fields)  # type: ignore[arg-type]


def test_plain_message_has_no_header_or_id() -> None:
    formatter = DiagnosticFormatter()

    formatted = formatter.format(make_diagnostic(), "main.py")

    assert formatted.text == "unused variable 'x'"
    assert formatted.style == "inline.warning"


def test_foreign_origin_gets_header() -> None:
    formatter = DiagnosticFormatter()
    diagnostic = make_diagnostic(origin="pkg/helpers.py")

    text = formatter.message(diagnostic, "main.py")

    assert text.startswith('In "pkg/helpers.py":\n')
    assert text.endswith("unused variable 'x'")


def test_same_origin_has_no_header() -> None:
    formatter = DiagnosticFormatter()

    text = formatter.message(make_diagnostic(origin="main.py"), "main.py")

    assert not text.startswith("In ")


def test_error_id_is_appended_by_default() -> None:
    formatter = DiagnosticFormatter()

    text = formatter.message(make_diagnostic(error_id="W0612"), "main.py")

    assert text == "unused variable 'x' [W0612]"


def test_error_id_hidden_when_disabled() -> None:
    formatter = DiagnosticFormatter(InlineConfig(display_error_id=False))
    diagnostic = make_diagnostic(error_id="W0612", origin="other.py")

    text = formatter.message(diagnostic, "main.py")

    assert "[" not in text
    assert text == 'In "other.py":\nunused variable \'x\''


@pytest.mark.parametrize(
    ("tag", "style"),
    [
        ("error", "inline.error"),
        ("E", "inline.error"),
        ("lsp-error", "inline.error"),
        (1, "inline.error"),
        ("warning", "inline.warning"),
        ("W", "inline.warning"),
        ("flycheck-warning", "inline.warning"),
        (2, "inline.warning"),
        ("info", "inline.note"),
        ("hint", "inline.note"),
        ("note", "inline.note"),
        (4, "inline.note"),
    ],
)
def test_severity_aliases_share_styles(tag: object, style: str) -> None:
    formatter = DiagnosticFormatter()

    formatted = formatter.format(make_diagnostic(severity=tag))

    assert formatted.style == style


def test_every_alias_resolves_to_a_canonical_severity() -> None:
    assert set(SEVERITY_ALIASES.values()) == set(Severity)
    assert Severity.from_tag(Severity.NOTE) is Severity.NOTE


def test_unknown_severity_tag_is_rejected() -> None:
    with pytest.raises(ValueError):
        Severity.from_tag("catastrophe")


def test_style_overrides_apply_to_aliases() -> None:
    config = InlineConfig().with_styles(warning="underline yellow")
    formatter = DiagnosticFormatter(config)

    formatted = formatter.format(make_diagnostic(severity="W"))

    assert formatted.style == "underline yellow"
    assert config.style_for("error") == "inline.error"
