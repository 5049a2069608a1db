"""Concurrency tests: shared engines, per-thread configs, rule registration."""

import re
from concurrent.futures import ThreadPoolExecutor

from markymark import (
    MarkyMark,
    ParseConfig,
    PlainText,
    RegexInlineRule,
    get_parse_config,
    parse_config_context,
    render_html,
)

DOCUMENTS = [
    f"# Doc {i}\n\n- item *{i}*\n  - nested\n\n> quote {i}\n\n```\ncode {i}\n```\n\n| a | b |\n|---|---|\n| {i} | x |"
    for i in range(50)
]


class CountRule(RegexInlineRule):
    pattern = re.compile(r"%")

    def __init__(self, name: str) -> None:
        self.name = name  # type: ignore[misc]

    def build(self, match, parser):  # type: ignore[no-untyped-def]
        return PlainText(raw="%", content=self.name)


class TestSharedEngine:
    """One engine used from many threads."""

    def test_parallel_matches_serial(self) -> None:
        mm = MarkyMark()
        serial = [mm.parse_markdown(doc) for doc in DOCUMENTS]

        with ThreadPoolExecutor(max_workers=8) as pool:
            parallel = list(pool.map(mm.parse_markdown, DOCUMENTS))

        assert parallel == serial

    def test_parallel_render(self) -> None:
        mm = MarkyMark()
        expected = [render_html(mm.parse_markdown(doc)) for doc in DOCUMENTS]

        with ThreadPoolExecutor(max_workers=8) as pool:
            rendered = list(pool.map(lambda doc: render_html(mm.parse_markdown(doc)), DOCUMENTS))

        assert rendered == expected

    def test_engines_with_different_configs(self) -> None:
        soft = MarkyMark(config=ParseConfig(hard_line_breaks=False))
        hard = MarkyMark()

        def parse(i: int) -> int:
            mm = soft if i % 2 else hard
            return len(mm.parse_markdown("a\nb")[0].children)

        with ThreadPoolExecutor(max_workers=8) as pool:
            counts = list(pool.map(parse, range(100)))

        assert counts == [3 if i % 2 == 0 else 1 for i in range(100)]


class TestConcurrentAddRule:
    """Rules registered while other threads parse."""

    def test_all_rules_registered(self) -> None:
        mm = MarkyMark()
        names = [f"rule{i}" for i in range(32)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda name: mm.add_rule(CountRule(name)), names))

        assert sorted(rule.name for rule in mm.flavor.added_inline_rules) == sorted(names)

    def test_parses_see_consistent_rule_sets(self) -> None:
        mm = MarkyMark()

        def work(i: int) -> str:
            if i % 4 == 0:
                mm.add_rule(CountRule(f"r{i}"))
            items = mm.parse_inline("%")
            return items[0].content

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(work, range(40)))

        # Each parse saw either no rule or a complete rule set
        assert all(result == "%" or result.startswith("r") for result in results)


class TestConfigIsolation:
    """ContextVar config does not bleed across threads."""

    def test_per_thread_config(self) -> None:
        def work(width: int) -> int:
            with parse_config_context(ParseConfig(tab_width=width)):
                return get_parse_config().tab_width

        with ThreadPoolExecutor(max_workers=4) as pool:
            widths = list(pool.map(work, range(1, 21)))

        assert widths == list(range(1, 21))
        assert get_parse_config() == ParseConfig()
