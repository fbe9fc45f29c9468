"""Tests for request composition and RequestOptionsBuilder."""
import dataclasses

import pytest

from apiport_session.core.domain import messages
from apiport_session.core.domain.models import AnalyzeRequestFlags, InputAssembly
from apiport_session.core.services import RequestOptionsBuilder, compose_request, flatten_targets

from fakes import FakeContext, FakeLogger, FakeOutput, FakeViewModel, make_snapshot, platform


def _compose(snapshot, **overrides):
    kwargs = dict(
        entrypoint="app.dll",
        assembly_paths=["app.dll", "lib.dll"],
        formats=["HTML"],
        referenced_packages=None,
        output_file_name="/reports/ApiPortAnalysis",
    )
    kwargs.update(overrides)
    return compose_request(snapshot, **kwargs)


class TestComposeRequest:
    def test_flattens_selected_versions_in_display_order(self):
        snapshot = make_snapshot(targets=(platform("A", ["v1", "v2"]), platform("B", ["v3"])))

        assert flatten_targets(snapshot) == ("A, Version=v1", "A, Version=v2", "B, Version=v3")

    def test_skips_unselected_versions(self):
        snapshot = make_snapshot(targets=(
            platform(".NET Core", ["2.0", "3.1", "5.0"], selected=["3.1"]),
            platform(".NET Standard", ["2.0"], selected=[]),
        ))

        composed = _compose(snapshot)

        assert composed.request.targets == (".NET Core, Version=3.1",)
        assert composed.advisories == ()

    def test_no_targets_emits_default_advisories_in_order(self):
        composed = _compose(make_snapshot())

        assert composed.request.targets == ()
        assert composed.advisories == (
            messages.USING_DEFAULT_TARGETS,
            messages.TARGET_SELECTION_GUIDANCE,
        )

    def test_one_warning_per_invalid_platform_with_selection(self):
        snapshot = make_snapshot(
            targets=(platform(".NET Core", ["3.1"]),),
            invalid_targets=(
                platform("Silverlight", ["5.0"]),
                platform("Windows Phone", ["8.1"], selected=[]),
                platform("Xamarin", ["1.0", "2.0"]),
            ),
        )

        composed = _compose(snapshot)

        assert composed.advisories == (
            messages.format_invalid_platform("Silverlight"),
            messages.format_invalid_platform("Xamarin"),
        )
        assert "Silverlight" in composed.advisories[0]

    def test_invalid_platforms_do_not_contribute_targets(self):
        snapshot = make_snapshot(invalid_targets=(platform("Silverlight", ["5.0"]),))

        composed = _compose(snapshot)

        assert composed.request.targets == ()
        assert composed.advisories[-2:] == (
            messages.USING_DEFAULT_TARGETS,
            messages.TARGET_SELECTION_GUIDANCE,
        )

    @pytest.mark.parametrize(
        "save_metadata, expected",
        [
            (True, AnalyzeRequestFlags.SHOW_NON_PORTABLE_APIS),
            (False, AnalyzeRequestFlags.SHOW_NON_PORTABLE_APIS | AnalyzeRequestFlags.NO_TELEMETRY),
        ],
    )
    def test_request_flags_follow_save_metadata(self, save_metadata, expected):
        composed = _compose(make_snapshot(save_metadata=save_metadata))

        assert composed.request.request_flags == expected
        assert AnalyzeRequestFlags.SHOW_NON_PORTABLE_APIS in composed.request.request_flags

    def test_inputs_are_paired_with_false_flag(self):
        composed = _compose(make_snapshot())

        assert composed.request.input_assemblies == frozenset({
            InputAssembly(path="app.dll", flag=False),
            InputAssembly(path="lib.dll", flag=False),
        })

    def test_auxiliary_sets_default_to_empty(self):
        request = _compose(make_snapshot()).request

        assert request.referenced_packages == frozenset()
        assert request.ignored_assembly_files == frozenset()
        assert request.breaking_change_suppressions == frozenset()
        assert request.invalid_input_files == frozenset()

    def test_referenced_packages_are_kept(self):
        request = _compose(make_snapshot(), referenced_packages=["Newtonsoft.Json", "Serilog"]).request

        assert request.referenced_packages == frozenset({"Newtonsoft.Json", "Serilog"})

    def test_request_is_immutable(self):
        request = _compose(make_snapshot()).request

        with pytest.raises(dataclasses.FrozenInstanceError):
            request.entrypoint = "other.dll"  # type: ignore[misc]


class TestRequestOptionsBuilder:
    @pytest.mark.asyncio
    async def test_refreshes_before_composing_and_writes_advisories(self):
        events: list = []
        view_model = FakeViewModel(make_snapshot(), events)
        output = FakeOutput(events)
        context = FakeContext(events)
        builder = RequestOptionsBuilder(view_model=view_model, output=output, context=context, logger=FakeLogger())

        request = await builder.build(
            entrypoint="app.dll",
            assembly_paths=["app.dll"],
            formats=["HTML"],
            referenced_packages=None,
            output_file_name="/reports/ApiPortAnalysis",
        )

        assert events == [
            "update",
            "run_on",
            ("line", messages.USING_DEFAULT_TARGETS),
            ("line", messages.TARGET_SELECTION_GUIDANCE),
        ]
        assert request.targets == ()
        assert context.entered == 1

    @pytest.mark.asyncio
    async def test_scenario_default_targets_with_saved_metadata(self):
        output = FakeOutput()
        logger = FakeLogger()
        builder = RequestOptionsBuilder(
            view_model=FakeViewModel(make_snapshot(save_metadata=True)),
            output=output,
            context=FakeContext(),
            logger=logger,
        )

        request = await builder.build(
            entrypoint="app.dll",
            assembly_paths=["app.dll"],
            formats=["HTML"],
            referenced_packages=[],
            output_file_name="/reports/ApiPortAnalysis",
        )

        assert request.request_flags == AnalyzeRequestFlags.SHOW_NON_PORTABLE_APIS
        assert output.lines == [messages.USING_DEFAULT_TARGETS, messages.TARGET_SELECTION_GUIDANCE]
        assert logger.messages().count("request_advisory") == 2

    @pytest.mark.asyncio
    async def test_no_lines_when_targets_are_valid(self):
        output = FakeOutput()
        builder = RequestOptionsBuilder(
            view_model=FakeViewModel(make_snapshot(targets=(platform("A", ["v1", "v2"]), platform("B", ["v3"])))),
            output=output,
            context=FakeContext(),
            logger=FakeLogger(),
        )

        request = await builder.build(
            entrypoint="app.dll",
            assembly_paths=["app.dll"],
            formats=["HTML", "Excel"],
            referenced_packages=None,
            output_file_name="/reports/out",
        )

        assert output.lines == []
        assert request.targets == ("A, Version=v1", "A, Version=v2", "B, Version=v3")
        assert request.output_formats == ("HTML", "Excel")
        assert request.output_file_name == "/reports/out"
