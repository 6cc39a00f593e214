"""Tests for static summary schemas, the website mapping and the loader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from agentready.analysis.static.loader import JsonFileStaticAnalyzer
from agentready.analysis.static.schemas import (
    FileSizeAnalysis,
    StaticAnalysisSummary,
    WebsiteAnalysis,
)
from agentready.analysis.static.website import website_to_static
from agentready.constants import AssessmentKind, ContextEfficiency


class TestStaticSummary:
    def test_accepts_camel_case(self) -> None:
        summary = StaticAnalysisSummary.model_validate({
            "hasReadme": True,
            "hasAgents": True,
            "errorHandling": True,
            "fileCount": 42,
            "workflowFiles": [".github/workflows/ci.yml"],
        })
        assert summary.has_readme is True
        assert summary.has_agents_doc is True
        assert summary.has_error_handling is True
        assert summary.file_count == 42
        assert summary.kind == AssessmentKind.REPOSITORY

    def test_website_kind_requires_signals(self) -> None:
        with pytest.raises(ValidationError, match="website signals"):
            StaticAnalysisSummary(kind=AssessmentKind.WEBSITE)

    def test_file_size_analysis_wire_shape(self) -> None:
        fsa = FileSizeAnalysis.model_validate({
            "totalFiles": 10,
            "filesBySize": {"under1MB": 9, "over50MB": 1},
            "criticalFiles": [
                {"path": "README.md", "isOptimal": False},
                {"path": "AGENTS.md"},
            ],
            "contextConsumption": {"contextEfficiency": "poor"},
            "agentCompatibility": {"overall": 55},
        })
        assert fsa.files_by_size.under_1mb == 9
        assert fsa.files_by_size.over_50mb == 1
        assert [f.path for f in fsa.non_optimal_critical_files] == [
            "README.md"
        ]
        assert fsa.context_consumption.context_efficiency == (
            ContextEfficiency.POOR
        )
        assert fsa.agent_compatibility.overall == 55

    def test_compatibility_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FileSizeAnalysis.model_validate(
                {"agentCompatibility": {"overall": 120}}
            )


class TestWebsiteToStatic:
    def test_maps_site_onto_summary(
        self, website_analysis: WebsiteAnalysis
    ) -> None:
        summary = website_to_static(website_analysis)
        assert summary.kind == AssessmentKind.WEBSITE
        assert summary.target_url == website_analysis.website_url
        assert summary.languages == website_analysis.technologies
        assert summary.file_count == 1
        assert summary.has_readme is False
        assert summary.website is not None
        assert summary.website.page_load_speed_ms == 1200
        assert summary.website.has_sitemap is True

    def test_page_load_speed_alias(self) -> None:
        site = WebsiteAnalysis.model_validate({"pageLoadSpeed": 800})
        assert site.page_load_speed_ms == 800


class TestJsonFileStaticAnalyzer:
    async def test_loads_repository_summary(self, tmp_path: Path) -> None:
        path = tmp_path / "summary.json"
        path.write_text(
            json.dumps({"hasReadme": True, "languages": ["Python"]}),
            encoding="utf-8",
        )
        summary = await JsonFileStaticAnalyzer().analyze_repository(
            str(path)
        )
        assert summary.has_readme is True
        # Path stands in for the target when the document has none
        assert summary.target_url == str(path)

    async def test_keeps_declared_target(self, tmp_path: Path) -> None:
        path = tmp_path / "summary.json"
        path.write_text(
            json.dumps({"targetUrl": "https://github.com/acme/app"}),
            encoding="utf-8",
        )
        summary = await JsonFileStaticAnalyzer().analyze_repository(
            str(path)
        )
        assert summary.target_url == "https://github.com/acme/app"

    async def test_loads_website(self, tmp_path: Path) -> None:
        path = tmp_path / "site.json"
        path.write_text(
            json.dumps({"pageTitle": "Acme", "hasSitemap": True}),
            encoding="utf-8",
        )
        site = await JsonFileStaticAnalyzer().analyze_website(str(path))
        assert site.page_title == "Acme"
        assert site.website_url == str(path)

    async def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            await JsonFileStaticAnalyzer().analyze_repository(
                str(tmp_path / "absent.json")
            )

    async def test_malformed_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "summary.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValidationError):
            await JsonFileStaticAnalyzer().analyze_repository(str(path))
