"""Tests for the Compiler pipeline (parser + matcher + cache)."""

import re

import pytest

from classcraft import CacheOptions, Compiler, CompilerConfig, Rule
from classcraft.errors import DuplicateRuleError
from classcraft.events import CacheHit, CacheMiss, CSSGenerated, EventBus, TokenUnresolved
from classcraft.handlers import FunctionHandler, StaticHandler, TemplateHandler
from classcraft.model import Severity
from classcraft.render import escape_selector, negate_value, render_rule
from classcraft.parser import parse

THEME = {"spacing": {"0": "0", "2": "0.5rem", "4": "1rem", "8": "2rem"}}


def _rules() -> list[Rule]:
    return [
        Rule(
            name="padding",
            pattern=re.compile(r"^p-(\d+)$"),
            handler=TemplateHandler({"padding": "{value}"}, theme_key="spacing"),
        ),
        Rule(
            name="margin-top",
            pattern=r"mt-(\d+)",
            handler=TemplateHandler({"margin-top": "{value}"}, theme_key="spacing"),
        ),
        Rule(name="flex", pattern="flex", handler=StaticHandler({"display": "flex"})),
    ]


@pytest.fixture()
def compiler() -> Compiler:
    return Compiler(rules=_rules(), theme=THEME)


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


class TestGenerate:
    def test_single_class(self, compiler):
        assert compiler.generate(["p-4"]) == ".p-4 { padding: 1rem; }"

    def test_important(self, compiler):
        assert compiler.generate(["!p-4"]) == r".\!p-4 { padding: 1rem !important; }"

    def test_variant_token_selector(self, compiler):
        assert compiler.generate(["hover:p-8"]) == r".hover\:p-8 { padding: 2rem; }"

    def test_negative_value(self, compiler):
        assert compiler.generate(["-mt-4"]) == ".-mt-4 { margin-top: -1rem; }"

    def test_variant_group_raw_string(self, compiler):
        css = compiler.generate(["md:(p-4 flex)"])
        assert css.splitlines() == [
            r".md\:p-4 { padding: 1rem; }",
            r".md\:flex { display: flex; }",
        ]

    def test_duplicates_generate_once(self, compiler):
        assert compiler.generate(["p-4", "p-4"]) == ".p-4 { padding: 1rem; }"

    def test_blocklist(self):
        config = CompilerConfig(blocklist=frozenset({"flex"}))
        compiler = Compiler(config=config, rules=_rules(), theme=THEME)
        assert compiler.generate(["flex", "p-4"]) == ".p-4 { padding: 1rem; }"

    def test_variant_groups_disabled(self):
        config = CompilerConfig(variant_groups=False)
        compiler = Compiler(config=config, rules=_rules(), theme=THEME)
        result = compiler.compile(["md:(p-4 flex)"])
        assert result.css == ""
        assert result.unresolved == ["md:(p-4", "flex)"]

    def test_custom_renderer(self):
        def renderer(parsed, properties):
            return f"{parsed.utility}={properties}"

        compiler = Compiler(rules=_rules(), theme=THEME, renderer=renderer)
        assert compiler.generate(["p-4"]) == "p-4={'padding': '1rem'}"


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


class TestDiagnostics:
    def test_unresolved_token_is_warning_not_error(self, compiler):
        result = compiler.compile(["p-4 unknown-thing"])
        assert result.css == ".p-4 { padding: 1rem; }"
        assert len(result.diagnostics) == 1
        diag = result.diagnostics[0]
        assert diag.code == "unresolved"
        assert diag.severity is Severity.WARNING
        assert diag.token == "unknown-thing"
        assert result.unresolved == ["unknown-thing"]

    def test_rule_without_value_is_info(self, compiler):
        result = compiler.compile(["p-7"])
        assert result.css == ""
        assert [d.code for d in result.diagnostics] == ["empty"]
        assert result.diagnostics[0].severity is Severity.INFO

    def test_bad_template_does_not_abort_class_list(self):
        broken = Rule(name="width", pattern=r"w-(\d+)", handler=TemplateHandler({"width": "{2}"}))
        compiler = Compiler(rules=_rules() + [broken], theme=THEME)
        result = compiler.compile(["flex", "w-4"])
        assert result.css == ".flex { display: flex; }"
        assert [(d.code, d.token) for d in result.diagnostics] == [("empty", "w-4")]

    def test_end_to_end_resolution(self):
        compiler = Compiler(rules=[Rule(name="padding", pattern=re.compile(r"^p-(\d+)$"))])
        items = compiler.resolve("!p-4 hover:p-8 unknown-thing")
        assert len(items) == 3
        assert items[0].parsed.important and items[0].match.match.group(1) == "4"
        assert items[1].parsed.variants == ("hover",) and items[1].match.captures[1] == "8"
        assert items[2].match is None
        assert not items[2].resolved


# ---------------------------------------------------------------------------
# Caching
# ---------------------------------------------------------------------------


class TestCaching:
    def test_second_call_hits_cache(self, compiler):
        compiler.generate(["p-4"])
        compiler.generate(["p-4"])
        stats = compiler.cache_stats()
        assert (stats.hits, stats.misses, stats.size) == (1, 1, 1)

    def test_cache_keyed_by_raw_string(self, compiler):
        compiler.generate(["hover:(p-4 flex)"])
        assert compiler.cache.keys() == ["hover:(p-4 flex)"]

    def test_unresolved_results_are_not_cached(self, compiler):
        compiler.generate(["nope"])
        assert compiler.cache.size == 0

    def test_theme_change_regenerates(self, compiler):
        assert compiler.generate(["p-4"]) == ".p-4 { padding: 1rem; }"
        compiler.set_theme({"spacing": {"4": "16px"}})
        assert compiler.generate(["p-4"]) == ".p-4 { padding: 16px; }"

    def test_lazy_theme_change_keeps_stale_entry_until_touched(self, compiler):
        compiler.generate(["p-4", "p-8"])
        compiler.set_theme({"spacing": {"4": "16px"}})
        assert compiler.cache.size == 2
        compiler.generate(["p-4"])
        assert compiler.cache.size == 2  # p-4 replaced, p-8 still stale
        assert compiler.cache.cleanup() == 1

    def test_eager_theme_change_wipes_cache(self, compiler):
        compiler.generate(["p-4"])
        compiler.set_theme({"spacing": {"4": "16px"}}, eager=True)
        assert compiler.cache.size == 0
        assert compiler.cache_stats().misses == 0

    def test_theme_is_read_only_view(self, compiler):
        with pytest.raises(TypeError):
            compiler.theme["spacing"] = {}

    def test_disabled_cache(self):
        config = CompilerConfig(cache=CacheOptions(enabled=False))
        compiler = Compiler(config=config, rules=_rules(), theme=THEME)
        compiler.generate(["p-4"])
        assert compiler.generate(["p-4"]) == ".p-4 { padding: 1rem; }"
        assert compiler.cache.size == 0

    def test_clear_cache(self, compiler):
        compiler.generate(["p-4"])
        compiler.clear_cache()
        assert compiler.cache.size == 0


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class TestRuleManagement:
    def test_add_and_remove(self, compiler):
        compiler.add_rule(
            Rule(name="block", pattern="block", handler=StaticHandler({"display": "block"}))
        )
        assert compiler.generate(["block"]) == ".block { display: block; }"
        assert compiler.remove_rule("block") is True
        assert compiler.generate(["block"]) == ""

    def test_higher_priority_rule_replaces_cached_css(self):
        low = Rule(name="low", pattern=r"p-(\d+)", handler=StaticHandler({"padding": "1px"}))
        compiler = Compiler(rules=[low])
        assert compiler.generate(["p-4"]) == ".p-4 { padding: 1px; }"

        compiler.add_rule(
            Rule(
                name="high",
                pattern=r"p-(\d+)",
                priority=10,
                handler=StaticHandler({"padding": "9px"}),
            )
        )
        assert compiler.generate(["p-4"]) == ".p-4 { padding: 9px; }"

    def test_add_rules_resolves_previously_cached_class_list(self, compiler):
        assert compiler.generate(["p-4 block"]) == ".p-4 { padding: 1rem; }"
        compiler.add_rules(
            [Rule(name="block", pattern="block", handler=StaticHandler({"display": "block"}))]
        )
        assert compiler.generate(["p-4 block"]).splitlines() == [
            ".p-4 { padding: 1rem; }",
            ".block { display: block; }",
        ]

    def test_removing_unknown_rule_keeps_cache_warm(self, compiler):
        compiler.generate(["p-4"])
        assert compiler.remove_rule("nope") is False
        compiler.generate(["p-4"])
        assert compiler.cache_stats().hits == 1

    def test_theme_round_trip_after_rule_change_recompiles(self, compiler):
        compiler.generate(["p-4"])
        compiler.set_theme({"spacing": {"4": "16px"}})
        compiler.remove_rule("padding")
        compiler.set_theme(THEME)
        assert compiler.generate(["p-4"]) == ""

    def test_strict_rule_names(self):
        config = CompilerConfig(strict_rule_names=True)
        with pytest.raises(DuplicateRuleError):
            Compiler(config=config, rules=_rules() + _rules())

    def test_reset(self, compiler):
        compiler.generate(["p-4"])
        compiler.reset()
        assert len(compiler.matcher) == 0
        assert compiler.cache.size == 0
        assert compiler.generate(["p-4"]) == ""

    def test_function_handler_sees_theme(self):
        rule = Rule(
            name="gap",
            pattern=r"gap-(\d+)",
            handler=FunctionHandler(lambda c, theme: {"gap": theme["spacing"][c[1]]}),
        )
        compiler = Compiler(rules=[rule], theme=THEME)
        assert compiler.generate(["gap-2"]) == ".gap-2 { gap: 0.5rem; }"


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class TestEvents:
    def test_event_sequence(self):
        bus = EventBus()
        events = []
        bus.on_all(events.append)
        compiler = Compiler(rules=_rules(), theme=THEME, bus=bus)
        compiler.generate(["p-4", "nope"])
        compiler.generate(["p-4"])
        assert events == [
            CacheMiss(class_name="p-4"),
            CacheMiss(class_name="nope"),
            TokenUnresolved(token="nope", utility="nope"),
            CSSGenerated(classes=("p-4", "nope"), css=".p-4 { padding: 1rem; }"),
            CacheHit(class_name="p-4"),
            CSSGenerated(classes=("p-4",), css=".p-4 { padding: 1rem; }"),
        ]


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


class TestRender:
    @pytest.mark.parametrize(
        "name, escaped",
        [
            ("p-4", "p-4"),
            ("hover:p-4", r"hover\:p-4"),
            ("w-[17px]", r"w-\[17px\]"),
            ("bg-red-500/80", r"bg-red-500\/80"),
            ("2xl:p-4", r"\32 xl\:p-4"),
        ],
    )
    def test_escape_selector(self, name, escaped):
        assert escape_selector(name) == escaped

    @pytest.mark.parametrize(
        "value, negated",
        [
            ("1rem", "-1rem"),
            ("-2px", "2px"),
            ("0", "0"),
            ("auto", "auto"),
            (".5rem", "-.5rem"),
            ("var(--x)", "calc(var(--x) * -1)"),
            ("inherit", "inherit"),
        ],
    )
    def test_negate_value(self, value, negated):
        assert negate_value(value) == negated

    def test_render_rule(self):
        css = render_rule(parse("!p-4"), {"padding": "1rem", "margin": "0"})
        assert css == r".\!p-4 { padding: 1rem !important; margin: 0 !important; }"
