"""Tests for the project descriptor parser."""

from __future__ import annotations

from repomedic.engines.health_scanner.descriptor import parse_descriptor

# ── Build settings ──


class TestProperties:
    def test_nullable_without_packages(self, tmp_path, csproj):
        path = csproj(tmp_path, "App", properties="    <Nullable>enable</Nullable>")
        record = parse_descriptor(path, tmp_path)
        assert record.nullable_enabled is True
        assert record.package_dependencies == []
        assert record.parse_errors == []

    def test_identity_fields(self, tmp_path, csproj):
        path = csproj(tmp_path, "App")
        record = parse_descriptor(path, tmp_path)
        assert record.project_name == "App"
        assert record.project_path == str(path)
        assert record.relative_path.replace("\\", "/") == "App/App.csproj"
        assert record.target_framework == "net8.0"

    def test_defaults_when_absent(self, tmp_path, csproj):
        path = csproj(tmp_path, "Lib")
        record = parse_descriptor(path, tmp_path)
        assert record.output_type == "Library"
        assert record.nullable_enabled is False
        assert record.implicit_usings_enabled is False
        assert record.generates_documentation is False
        assert record.language_version is None

    def test_flags_enabled(self, tmp_path, csproj):
        props = "\n".join(
            [
                "    <OutputType>Exe</OutputType>",
                "    <Nullable>enable</Nullable>",
                "    <ImplicitUsings>enable</ImplicitUsings>",
                "    <GenerateDocumentationFile>true</GenerateDocumentationFile>",
                "    <LangVersion>latest</LangVersion>",
            ]
        )
        record = parse_descriptor(csproj(tmp_path, "Tool", properties=props), tmp_path)
        assert record.output_type == "Exe"
        assert record.implicit_usings_enabled is True
        assert record.generates_documentation is True
        assert record.language_version == "latest"

    def test_nullable_values_other_than_enable_are_off(self, tmp_path, csproj):
        props = "    <Nullable>warnings</Nullable>\n    <ImplicitUsings>disable</ImplicitUsings>"
        record = parse_descriptor(csproj(tmp_path, "App", properties=props), tmp_path)
        assert record.nullable_enabled is False
        assert record.implicit_usings_enabled is False

    def test_multi_target_fallback(self, tmp_path, csproj):
        raw = (
            '<Project Sdk="Microsoft.NET.Sdk"><PropertyGroup>'
            "<TargetFrameworks>net6.0;net8.0</TargetFrameworks>"
            "</PropertyGroup></Project>"
        )
        record = parse_descriptor(csproj(tmp_path, "Multi", raw=raw), tmp_path)
        assert record.target_framework == "net6.0;net8.0"

    def test_legacy_msbuild_namespace(self, tmp_path, csproj):
        raw = (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            '<Project ToolsVersion="15.0" xmlns="http://schemas.microsoft.com/developer/msbuild/2003">'
            "<PropertyGroup><OutputType>WinExe</OutputType></PropertyGroup>"
            '<ItemGroup><PackageReference Include="Newtonsoft.Json" Version="13.0.1" /></ItemGroup>'
            "</Project>"
        )
        record = parse_descriptor(csproj(tmp_path, "Legacy", raw=raw), tmp_path)
        assert record.output_type == "WinExe"
        assert [p.name for p in record.package_dependencies] == ["Newtonsoft.Json"]


# ── References ──


class TestReferences:
    def test_package_references(self, tmp_path, csproj):
        items = "\n".join(
            [
                '    <PackageReference Include="Serilog" Version="3.1.1" />',
                '    <PackageReference Include="Polly"><Version>8.2.0</Version></PackageReference>',
                '    <PackageReference Include="Floating" />',
            ]
        )
        record = parse_descriptor(csproj(tmp_path, "App", items=items), tmp_path)
        deps = {p.name: p.version for p in record.package_dependencies}
        assert deps == {"Serilog": "3.1.1", "Polly": "8.2.0", "Floating": "unknown"}

    def test_duplicate_package_first_wins(self, tmp_path, csproj):
        items = (
            '    <PackageReference Include="Serilog" Version="3.1.1" />\n'
            '    <PackageReference Include="serilog" Version="2.0.0" />'
        )
        record = parse_descriptor(csproj(tmp_path, "App", items=items), tmp_path)
        assert len(record.package_dependencies) == 1
        assert record.package_dependencies[0].version == "3.1.1"

    def test_project_references(self, tmp_path, csproj):
        items = "\n".join(
            [
                '    <ProjectReference Include="..\\Core\\Core.csproj" />',
                '    <ProjectReference Include="../Shared/Shared.csproj" PrivateAssets="All" '
                "Condition=\"'$(Configuration)' == 'Debug'\" />",
            ]
        )
        record = parse_descriptor(csproj(tmp_path, "App", items=items), tmp_path)
        core, shared = record.project_references
        assert core.project_name == "Core"
        assert core.path == "..\\Core\\Core.csproj"
        assert core.is_private is False
        assert shared.project_name == "Shared"
        assert shared.is_private is True
        assert shared.condition == "'$(Configuration)' == 'Debug'"


# ── Failures ──


class TestMalformed:
    def test_unterminated_tag(self, tmp_path, csproj):
        raw = '<Project Sdk="Microsoft.NET.Sdk"><PropertyGroup><Nullable>enable</Nullable>'
        record = parse_descriptor(csproj(tmp_path, "Broken", raw=raw), tmp_path)
        assert record.project_name == "Broken"
        assert record.relative_path.replace("\\", "/") == "Broken/Broken.csproj"
        assert len(record.parse_errors) == 1
        assert record.parse_errors[0].startswith("ParseError")
        assert record.package_dependencies == []
        assert record.project_references == []
        assert record.transitive_dependencies == []
        assert record.nullable_enabled is False
        assert record.has_errors

    def test_missing_file(self, tmp_path):
        record = parse_descriptor(tmp_path / "Gone.csproj", tmp_path)
        assert record.project_name == "Gone"
        assert len(record.parse_errors) == 1
