import json

import pytest
from pydantic import ValidationError

from rim_tool.intent import Mode, RimIntent, UsageRequest


def test_defaults():
    intent = RimIntent()
    assert intent.mode is Mode.NONE
    assert intent.create_output_file == ""
    assert intent.attributes_file == ""
    assert intent.hash_alg is None
    assert not intent.show_cert
    assert not (intent.create or intent.verify or intent.parse)


def test_intent_is_immutable():
    intent = RimIntent(mode=Mode.CREATE, hash_alg="256")
    with pytest.raises(ValidationError):
        intent.mode = Mode.VERIFY
    with pytest.raises(ValidationError):
        UsageRequest(message="x").message = "y"


def test_to_json():
    intent = RimIntent(mode=Mode.VERIFY, has_arguments=True, verify_input_path="base.swidtag")
    data = json.loads(intent.to_json())
    assert data["mode"] == "verify"
    assert data["verify_input_path"] == "base.swidtag"
    assert data["parse_input_path"] is None
