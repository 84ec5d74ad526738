"""
Unit tests for analytics/facts.py — export/import extraction and estimators.
"""
from context_analyzer.analytics.facts import (
    count_lines,
    estimate_tokens,
    extract_exports,
    extract_imports,
)


class TestExtractExports:
    def test_named_declarations(self):
        src = (
            "export function a() {}\n"
            "export async function b() {}\n"
            "export const c = 1\n"
            "export class D {}\n"
            "export interface E {}\n"
            "export type F = string\n"
            "export enum G { X }\n"
        )
        assert extract_exports(src) == ["a", "b", "c", "D", "E", "F", "G"]

    def test_default_named_function(self):
        assert extract_exports("export default function main() {}") == ["main"]

    def test_default_anonymous(self):
        assert extract_exports("export default {}") == ["default"]
        assert extract_exports("export default function () {}") == ["default"]

    def test_default_identifier(self):
        assert extract_exports("const x = 1\nexport default x") == ["x"]

    def test_export_list_uses_exported_alias(self):
        assert extract_exports("export { a, b as c }") == ["a", "c"]

    def test_reexport_list_counts_as_export(self):
        assert extract_exports("export { helper } from './util'") == ["helper"]

    def test_deduplicated_in_source_order(self):
        src = "export const b = 1\nexport { b }\nexport function a() {}"
        assert extract_exports(src) == ["b", "a"]

    def test_no_exports(self):
        assert extract_exports("const x = 1") == []


class TestExtractImports:
    def test_import_forms(self):
        src = (
            "import React from 'react'\n"
            "import { a, b } from \"./a\"\n"
            "import * as ns from './ns'\n"
            "import type { T } from './types'\n"
            "import './styles.css'\n"
            "export * from './reexport'\n"
            "export { x } from './x'\n"
            "const fs = require('fs')\n"
        )
        assert extract_imports(src) == [
            "react", "./a", "./ns", "./types", "./styles.css", "./reexport", "./x", "fs",
        ]

    def test_multiline_named_import(self):
        src = "import {\n  a,\n  b,\n} from './multi'\n"
        assert extract_imports(src) == ["./multi"]

    def test_dynamic_import_ignored(self):
        assert extract_imports("const m = await import('./lazy')") == []

    def test_duplicates_collapsed(self):
        src = "import { a } from './a'\nimport { b } from './a'\n"
        assert extract_imports(src) == ["./a"]


class TestEstimators:
    def test_tokens_round_up(self):
        assert estimate_tokens("") == 0
        assert estimate_tokens("abcd") == 1
        assert estimate_tokens("abcde") == 2

    def test_line_count(self):
        assert count_lines("") == 0
        assert count_lines("one") == 1
        assert count_lines("one\ntwo\n") == 3
