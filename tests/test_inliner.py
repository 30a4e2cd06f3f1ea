from pathlib import Path, PurePosixPath

import pytest

from kickstart.inline import (
    ErrorReporter,
    LoggingReporter,
    TemplateInliner,
    TokenStatus,
    parse_placeholder,
)
from tests.infrastructure.file_utils import write
from tests.infrastructure.project_builders import create_component


@pytest.fixture
def inliner(tmp_path: Path, reporter) -> TemplateInliner:
    return TemplateInliner(tmp_path, reporter=reporter)


@pytest.mark.parametrize("text", [
    "",
    "<p>plain html</p>",
    "{app:header}",                 # category without braces
    "{other:{header}}",             # unknown kind
    "{app:{head er}}",              # space is not allowed
    "function f() { return {a: 1}; }",
])
def test_text_without_placeholders_is_unchanged(inliner, text):
    assert inliner.resolve(text) == text


def test_app_fragment_is_inlined(tmp_path, inliner):
    create_component(tmp_path, "teaser", "X")
    assert inliner.resolve("{app:{teaser}}") == "X"
    assert inliner.resolve("<div>{app:{teaser}}</div>") == "<div>X</div>"


def test_named_fragment_uses_name_as_file(tmp_path, inliner):
    create_component(tmp_path, "teaser", "default")
    create_component(tmp_path, "teaser", "wide one", name="wide")
    assert inliner.resolve("{app:{teaser}:{wide}} {app:{teaser}}") == "wide one default"


def test_missing_fragment_stays_verbatim_without_report(inliner, reporter):
    assert inliner.resolve("a {app:{missing}} b") == "a {app:{missing}} b"
    assert reporter.messages == []


def test_deferred_fragment_has_no_banner(tmp_path, inliner):
    create_component(tmp_path, "map", "<div id=map></div>", kind="deferred")
    assert inliner.resolve("{deferred:{map}}") == "<div id=map></div>"


def test_svg_fragment_is_wrapped_in_banners(tmp_path, inliner):
    create_component(tmp_path, "icon", "<svg/>\n", kind="svg")
    path = "components/app/_svg/icon/icon.svg"
    assert inliner.resolve("{svg:{icon}}") == (
        f"<!-- START {path} -->\n<svg/>\n<!-- END {path} -->\n"
    )


def test_nested_fragments_are_fully_resolved(tmp_path, inliner):
    create_component(tmp_path, "a", "{app:{b}}")
    create_component(tmp_path, "b", "Y")
    assert inliner.resolve("{app:{a}}") == "Y"


def test_three_levels_and_siblings(tmp_path, inliner):
    create_component(tmp_path, "page", "[{app:{row}}|{app:{row}}]")
    create_component(tmp_path, "row", "({app:{cell}})")
    create_component(tmp_path, "cell", "c")
    assert inliner.resolve("{app:{page}}") == "[(c)|(c)]"


def test_missing_token_inside_fragment_stays_verbatim(tmp_path, inliner):
    create_component(tmp_path, "a", "{app:{missing}}")
    assert inliner.resolve("{app:{a}}") == "{app:{missing}}"


def test_self_inclusion_is_reported_and_terminates(tmp_path, inliner, reporter):
    create_component(tmp_path, "a", "A[{app:{a}}]")
    assert inliner.resolve("{app:{a}}") == "A[{app:{a}}]"
    assert reporter.messages == [
        "Circular include dependency: components/app/a/a.html -> components/app/a/a.html"
    ]


def test_transitive_cycle_is_reported_with_chain(tmp_path, inliner, reporter):
    create_component(tmp_path, "a", "A[{app:{b}}]")
    create_component(tmp_path, "b", "B[{app:{a}}]")
    assert inliner.resolve("{app:{a}}") == "A[B[{app:{a}}]]"
    assert len(reporter.messages) == 1
    assert reporter.messages[0] == (
        "Circular include dependency: "
        "components/app/a/a.html -> components/app/b/b.html -> components/app/a/a.html"
    )


def test_same_fragment_twice_is_not_a_cycle(tmp_path, inliner, reporter):
    create_component(tmp_path, "x", "x")
    create_component(tmp_path, "pair", "{app:{x}}{app:{x}}")
    assert inliner.resolve("{app:{pair}}") == "xx"
    assert reporter.messages == []


def test_read_failure_is_reported_and_siblings_continue(tmp_path, inliner, reporter):
    # a directory where the fragment file should be: exists, but cannot be read
    (tmp_path / "components" / "app" / "broken" / "broken.html").mkdir(parents=True)
    create_component(tmp_path, "ok", "fine")

    out = inliner.resolve("{app:{broken}} {app:{ok}}")

    assert out == "{app:{broken}} fine"
    assert len(reporter.messages) == 1
    assert reporter.messages[0].startswith(
        "Failed to inline {app:{broken}} from components/app/broken/broken.html:"
    )


def test_undecodable_fragment_is_reported(tmp_path, inliner, reporter):
    p = tmp_path / "components" / "app" / "bin" / "bin.html"
    p.parent.mkdir(parents=True)
    p.write_bytes(b"\xff\xfe\xfa")
    assert inliner.resolve("{app:{bin}}") == "{app:{bin}}"
    assert len(reporter.messages) == 1


def test_resolve_detailed_lists_tokens_in_pre_order(tmp_path, inliner):
    create_component(tmp_path, "a", "A[{app:{b}}{app:{gone}}]")
    create_component(tmp_path, "b", "B")

    result = inliner.resolve_detailed("{app:{a}} {deferred:{none}}")

    assert result.text == "A[B{app:{gone}}] {deferred:{none}}"
    assert [(t.placeholder.raw, t.status, t.depth) for t in result.tokens] == [
        ("{app:{a}}", TokenStatus.INLINED, 0),
        ("{app:{b}}", TokenStatus.INLINED, 1),
        ("{app:{gone}}", TokenStatus.MISSING, 1),
        ("{deferred:{none}}", TokenStatus.MISSING, 0),
    ]
    assert [t.path for t in result.unresolved] == [
        PurePosixPath("components/app/gone/gone.html"),
        PurePosixPath("components/app/_deferred/none/none.html"),
    ]


def test_resolve_detailed_marks_cycles(tmp_path, inliner):
    create_component(tmp_path, "a", "{app:{a}}")
    result = inliner.resolve_detailed("{app:{a}}")
    statuses = [t.status for t in result.tokens]
    assert statuses == [TokenStatus.INLINED, TokenStatus.CYCLE]
    assert result.tokens[1].error.startswith("Circular include dependency")
    assert result.tokens[1].replacement == "{app:{a}}"


def test_custom_components_dir(tmp_path, reporter):
    write(tmp_path / "src" / "parts" / "app" / "nav" / "nav.html", "<nav/>")
    inliner = TemplateInliner(tmp_path / "src", components_dir="parts", reporter=reporter)
    assert inliner.resolve("{app:{nav}}") == "<nav/>"
    assert inliner.fragment_path(parse_placeholder("{app:{nav}}")) == tmp_path / "src" / "parts" / "app" / "nav" / "nav.html"


def test_resolve_file_reads_template(tmp_path, inliner):
    create_component(tmp_path, "t", "T")
    page = write(tmp_path / "page.html", "<p>{app:{t}}</p>\n")
    assert inliner.resolve_file(page) == "<p>T</p>\n"


def test_resolve_file_missing_template_raises(tmp_path, inliner):
    with pytest.raises(FileNotFoundError):
        inliner.resolve_file(tmp_path / "nope.html")


def test_calls_are_independent(tmp_path, inliner, reporter):
    create_component(tmp_path, "a", "{app:{a}}")
    inliner.resolve("{app:{a}}")
    inliner.resolve("{app:{a}}")
    # each call starts with an empty inclusion stack
    assert len(reporter.messages) == 2


def test_default_reporter_logs_errors(tmp_path, caplog):
    create_component(tmp_path, "a", "{app:{a}}")
    inliner = TemplateInliner(tmp_path)
    assert isinstance(inliner.reporter, LoggingReporter)
    assert isinstance(inliner.reporter, ErrorReporter)

    with caplog.at_level("ERROR", logger="kickstart.inline"):
        inliner.resolve("{app:{a}}")

    assert any("Circular include dependency" in r.getMessage() for r in caplog.records)
