import json
from pathlib import Path

import pytest

from type_to_schema import PipelineGenerator, SchemaGeneratorConfig


def load_test_data():
    """Load test cases from JSON file"""
    test_data_path = Path(__file__).parent / "test_data" / "struct_synthesis_tests.json"
    with open(test_data_path) as f:
        return json.load(f)


@pytest.mark.parametrize("test_case", load_test_data(), ids=lambda tc: tc["name"])
def test_struct_synthesis(test_case):
    """Test schema synthesis of named, positional and unit structs"""
    config = SchemaGeneratorConfig.from_dict(test_case.get("config", {}))

    generator = PipelineGenerator(test_case["declaration"], config)
    [result] = generator.generate()

    assert result.name == test_case["declaration"]["name"]
    assert result.schema.to_dict() == test_case["expected"]


if __name__ == "__main__":
    pytest.main([__file__])
