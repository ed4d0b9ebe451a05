"""
Document Compiler Tests

Tests for compiling association messages into DocumentState: run
identity, plugin layout, output and orchestration paths, parameter
substitution, and malformed document handling.
"""

import json
import os

import pytest
from pydantic import ValidationError

from core.clock import FrozenClock
from core.schemas.errors import ErrorCodes, MalformedDocumentException
from core.schemas.state import NamedPlugins, OrderedPlugins, PluginState, PluginConfiguration

from association import (
    DocumentCompiler,
    parse_document_content,
    parse_document_with_params,
)

from fixtures import (
    make_association_message,
    make_legacy_document,
    make_step_document,
)


RUN_ID = "2026-01-01T00-00-00.000Z"
DOCUMENT_ID = f"assoc-1.{RUN_ID}"


class TestRunIdentity:
    """Tests for the generated document information."""

    def test_identity_fields(self, compiler):
        state = compiler.compile(make_association_message())
        info = state.document_information

        assert info.run_id == RUN_ID
        assert info.document_id == DOCUMENT_ID
        assert info.association_id == "assoc-1"
        assert info.instance_id == "i-1"
        assert info.message_id == "aws.ssm.assoc-1.i-1"
        assert info.document_name == "AWS-RunShellScript"
        assert info.document_status == "InProgress"
        assert info.is_command is False

    def test_created_date_comes_from_the_association(self, compiler):
        state = compiler.compile(make_association_message())
        assert state.document_information.created_date == "2026-01-27T21:35:00.123Z"

    def test_run_once_is_carried(self, compiler):
        state = compiler.compile(make_association_message(run_once=True))
        assert state.document_information.run_once is True

    def test_document_type_and_schema_version(self, compiler):
        state = compiler.compile(make_association_message())
        assert state.document_type == "Association"
        assert state.schema_version == "2.2"

    def test_repeated_runs_share_message_id_only(self, runtime_config):
        clock = FrozenClock()
        compiler = DocumentCompiler(config=runtime_config, clock=clock)
        raw = make_association_message()

        first = compiler.compile(raw).document_information
        clock.advance(milliseconds=1)
        second = compiler.compile(raw).document_information

        assert first.message_id == second.message_id
        assert first.run_id != second.run_id
        assert first.document_id != second.document_id


class TestStepDocuments:
    """Tests for mainSteps documents."""

    def test_single_step_scenario(self, compiler, runtime_config):
        state = compiler.compile(make_association_message())

        assert isinstance(state.plugins, OrderedPlugins)
        assert state.plugins_information == {}
        assert len(state.instance_plugins_information) == 1

        unit = state.instance_plugins_information[0]
        assert unit.id == "step1"
        assert unit.name == "aws:runShellScript"
        assert unit.has_executed is False

        config = unit.configuration
        assert config.output_s3_bucket_name == "b"
        assert config.output_s3_key_prefix == f"p/{DOCUMENT_ID}/i-1/aws:runShellScript"
        assert config.orchestration_directory == os.path.join(
            runtime_config.agent.data_store_path,
            "i-1",
            "document",
            "orchestration",
            DOCUMENT_ID,
            "aws:runShellScript",
        )
        assert config.message_id == "aws.ssm.assoc-1.i-1"
        assert config.book_keeping_file_name == DOCUMENT_ID
        assert config.properties == {"runCommand": ["echo hello"]}

    def test_steps_keep_document_order(self, compiler):
        steps = [
            {"action": "aws:runShellScript", "name": "third"},
            {"action": "aws:runPowerShellScript", "name": "first"},
            {"action": "aws:configurePackage", "name": "second"},
        ]
        state = compiler.compile(make_association_message(document=make_step_document(steps)))

        assert [u.id for u in state.instance_plugins_information] == ["third", "first", "second"]
        assert [u.name for u in state.instance_plugins_information] == [
            "aws:runShellScript",
            "aws:runPowerShellScript",
            "aws:configurePackage",
        ]

    def test_paths_use_the_action_not_the_step_name(self, compiler):
        steps = [{"action": "aws:runShellScript", "name": "install"}]
        state = compiler.compile(make_association_message(document=make_step_document(steps)))

        config = state.instance_plugins_information[0].configuration
        assert config.output_s3_key_prefix.endswith("/aws:runShellScript")
        assert config.orchestration_directory.endswith("aws:runShellScript")
        assert "install" not in config.output_s3_key_prefix

    def test_step_settings_are_carried(self, compiler):
        steps = [{
            "action": "aws:runShellScript",
            "name": "s",
            "settings": {"StartType": "Auto"},
        }]
        state = compiler.compile(make_association_message(document=make_step_document(steps)))
        assert state.instance_plugins_information[0].configuration.settings == {"StartType": "Auto"}


class TestLegacyDocuments:
    """Tests for runtimeConfig documents."""

    def test_units_keyed_by_plugin_name(self, compiler):
        state = compiler.compile(make_association_message(document=make_legacy_document()))

        assert isinstance(state.plugins, NamedPlugins)
        assert state.instance_plugins_information == ()
        assert list(state.plugins_information) == ["aws:runScript"]

        unit = state.plugins_information["aws:runScript"]
        assert unit.id == "aws:runScript"
        assert unit.name == "aws:runScript"
        assert unit.configuration.output_s3_key_prefix == f"p/{DOCUMENT_ID}/i-1/aws:runScript"
        assert unit.configuration.properties == [
            {"id": "0.aws:runScript", "runCommand": ["echo hello"]}
        ]

    def test_multiple_plugins(self, compiler):
        runtime_config = {
            "aws:runScript": {"properties": {"runCommand": ["a"]}},
            "aws:updateSsmAgent": {"properties": {"agentName": "amazon-ssm-agent"}},
        }
        document = make_legacy_document(runtime_config)
        state = compiler.compile(make_association_message(document=document))

        assert set(state.plugins_information) == {"aws:runScript", "aws:updateSsmAgent"}
        assert state.plugin_count == 2

    def test_legacy_wins_when_both_are_present(self, compiler):
        document = json.dumps({
            "schemaVersion": "1.2",
            "runtimeConfig": {"aws:runScript": {"properties": {}}},
            "mainSteps": [{"action": "aws:runShellScript", "name": "s"}],
        })
        state = compiler.compile(make_association_message(document=document))

        assert isinstance(state.plugins, NamedPlugins)
        assert state.instance_plugins_information == ()


class TestNoopDocuments:
    """Tests for documents that declare no plugins."""

    @pytest.mark.parametrize("body", [
        {"schemaVersion": "2.2"},
        {"schemaVersion": "2.2", "mainSteps": []},
        {"schemaVersion": "1.2", "runtimeConfig": {}},
        {"schemaVersion": "1.2", "runtimeConfig": {}, "mainSteps": []},
    ])
    def test_no_plugins(self, compiler, body):
        state = compiler.compile(make_association_message(document=json.dumps(body)))

        assert state.is_noop
        assert state.plugins is None
        assert state.plugin_count == 0
        assert state.plugins_information == {}
        assert state.instance_plugins_information == ()

    def test_noop_still_has_identity(self, compiler):
        document = json.dumps({"schemaVersion": "2.2"})
        state = compiler.compile(make_association_message(document=document))
        assert state.document_information.document_id == DOCUMENT_ID


class TestOutputLocation:
    """Tests for S3 output paths."""

    def test_empty_key_prefix_is_skipped(self, compiler):
        raw = make_association_message(key_prefix="")
        state = compiler.compile(raw)

        config = state.instance_plugins_information[0].configuration
        assert config.output_s3_key_prefix == f"{DOCUMENT_ID}/i-1/aws:runShellScript"

    def test_no_output_location(self, compiler):
        raw = make_association_message(bucket=None, key_prefix=None)
        state = compiler.compile(raw)

        config = state.instance_plugins_information[0].configuration
        assert config.output_s3_bucket_name == ""
        assert config.output_s3_key_prefix == f"{DOCUMENT_ID}/i-1/aws:runShellScript"

    def test_nested_key_prefix(self, compiler):
        raw = make_association_message(key_prefix="logs/runs/")
        state = compiler.compile(raw)

        config = state.instance_plugins_information[0].configuration
        assert config.output_s3_key_prefix == f"logs/runs/{DOCUMENT_ID}/i-1/aws:runShellScript"


class TestParameterBinding:
    """Tests for parameters flowing through compilation."""

    def test_string_list_parameter_substituted_into_inputs(self, compiler):
        document = make_step_document(
            steps=[{
                "action": "aws:runShellScript",
                "name": "run",
                "inputs": {"runCommand": "{{ commands }}"},
            }],
            parameters={"commands": {"type": "StringList"}},
        )
        raw = make_association_message(
            document=document,
            parameters={"commands": ["echo a", "echo b"]},
        )
        state = compiler.compile(raw)

        properties = state.instance_plugins_information[0].configuration.properties
        assert properties == {"runCommand": ["echo a", "echo b"]}

    def test_default_substituted_into_legacy_properties(self, compiler):
        document = make_legacy_document(
            runtime_config={"aws:runScript": {"properties": {"dir": "{{ workingDirectory }}"}}},
            parameters={"workingDirectory": {"type": "String", "default": "/tmp"}},
        )
        state = compiler.compile(make_association_message(document=document))

        properties = state.plugins_information["aws:runScript"].configuration.properties
        assert properties == {"dir": "/tmp"}

    def test_undeclared_parameter_is_not_substituted(self, compiler):
        document = make_step_document(
            steps=[{
                "action": "aws:runShellScript",
                "name": "run",
                "inputs": {"runCommand": ["{{ sneaky }}"]},
            }],
        )
        raw = make_association_message(document=document, parameters={"sneaky": ["rm -rf /"]})
        state = compiler.compile(raw)

        properties = state.instance_plugins_information[0].configuration.properties
        assert properties == {"runCommand": ["{{ sneaky }}"]}

    def test_payload_carries_binding_table(self):
        document = make_step_document(parameters={"a": {"type": "String", "default": "x"}})
        payload = parse_document_with_params(make_association_message(document=document))

        assert payload.parameters == {"a": "x"}
        assert payload.command_id == "assoc-1"
        assert payload.document_name == "AWS-RunShellScript"
        assert payload.output_s3_bucket_name == "b"
        assert payload.output_s3_key_prefix == "p"

    def test_parse_collects_anomalies(self, compiler):
        document = make_step_document(parameters={"n": {"type": "Integer"}})
        raw = make_association_message(document=document, parameters={"n": ["3"]})
        anomalies = []

        payload = compiler.parse(raw, anomalies=anomalies)
        state = compiler.compile(raw, payload)

        assert [a.parameter for a in anomalies] == ["n"]
        assert state.plugin_count == 1


class TestMalformedDocuments:
    """Tests for document bodies that cannot be compiled."""

    @pytest.mark.parametrize("document", [
        "not json",
        "[1, 2, 3]",
        '"just a string"',
        "{}",
        json.dumps({"schemaVersion": "2.2", "mainSteps": [{"name": "no-action"}]}),
        json.dumps({"schemaVersion": "2.2", "mainSteps": [{"action": "aws:runShellScript"}]}),
        json.dumps({"schemaVersion": "2.2", "mainSteps": {"not": "a list"}}),
    ])
    def test_compile_raises(self, compiler, document):
        with pytest.raises(MalformedDocumentException) as exc_info:
            compiler.compile(make_association_message(document=document))

        assert exc_info.value.code == ErrorCodes.MALFORMED_DOCUMENT
        assert exc_info.value.retryable is False
        assert exc_info.value.details["association_id"] == "assoc-1"

    def test_validation_errors_are_attached(self):
        with pytest.raises(MalformedDocumentException) as exc_info:
            parse_document_content("{}")
        assert exc_info.value.details["errors"]

    def test_unknown_keys_are_ignored(self):
        content = parse_document_content(
            {"schemaVersion": "2.2", "assumeRole": "arn", "mainSteps": []}
        )
        assert content.schema_version == "2.2"


class TestDocumentStateShape:
    """Tests for the immutable state and its wire rendering."""

    def test_state_is_frozen(self, compiler):
        state = compiler.compile(make_association_message())
        with pytest.raises(ValidationError):
            state.schema_version = "9.9"

    def test_has_executed_updates_by_copy(self, compiler):
        state = compiler.compile(make_association_message())
        unit = state.instance_plugins_information[0]

        done = unit.model_copy(update={"has_executed": True})

        assert done.has_executed is True
        assert state.instance_plugins_information[0].has_executed is False

    def test_variants_require_a_unit(self):
        with pytest.raises(ValidationError):
            NamedPlugins(plugins={})
        with pytest.raises(ValidationError):
            OrderedPlugins(steps=())

    def test_variant_round_trips_by_discriminator(self):
        unit = PluginState(id="s", name="aws:runShellScript", configuration=PluginConfiguration())
        layout = OrderedPlugins(steps=(unit,))
        assert layout.model_dump()["kind"] == "ordered"

    def test_to_wire_step_document(self, compiler):
        wire = compiler.compile(make_association_message()).to_wire()

        assert wire["DocumentType"] == "Association"
        assert wire["SchemaVersion"] == "2.2"
        assert wire["PluginsInformation"] is None
        assert wire["DocumentInformation"]["DocumentID"] == DOCUMENT_ID
        assert wire["DocumentInformation"]["MessageID"] == "aws.ssm.assoc-1.i-1"

        (unit,) = wire["InstancePluginsInformation"]
        assert unit["Id"] == "step1"
        assert unit["Name"] == "aws:runShellScript"
        assert unit["HasExecuted"] is False
        assert unit["Configuration"]["BookKeepingFileName"] == DOCUMENT_ID

    def test_to_wire_legacy_document(self, compiler):
        wire = compiler.compile(make_association_message(document=make_legacy_document())).to_wire()

        assert wire["InstancePluginsInformation"] is None
        assert list(wire["PluginsInformation"]) == ["aws:runScript"]

    def test_to_wire_is_json_serializable(self, compiler):
        wire = compiler.compile(make_association_message()).to_wire()
        assert json.loads(json.dumps(wire)) == wire
