import json
from pathlib import Path

import pytest

from type_to_schema import PipelineGenerator, SchemaGeneratorConfig


def discover_test_cases():
    """Automatically discover all test cases from test_cases directory"""
    test_cases_dir = Path(__file__).parent / "test_data" / "test_cases"
    test_cases = []

    for test_dir in sorted(test_cases_dir.iterdir()):
        if not test_dir.is_dir() or test_dir.name.startswith("."):
            continue

        declarations_file = test_dir / "declarations.json"
        reference_file = test_dir / "reference.json"
        if not declarations_file.exists() or not reference_file.exists():
            continue

        test_cases.append(
            {
                "test_name": test_dir.name,
                "declarations_file": declarations_file,
                "config_file": test_dir / "config.json",
                "reference_file": reference_file,
                "aliases_file": test_dir / "type_aliases.rs",
            }
        )

    return test_cases


def _generator(test_case):
    with open(test_case["declarations_file"]) as f:
        declarations = json.load(f)

    if test_case["config_file"].exists():
        with open(test_case["config_file"]) as f:
            config = SchemaGeneratorConfig.from_dict(json.load(f))
    else:
        config = SchemaGeneratorConfig()

    return PipelineGenerator(declarations, config)


@pytest.mark.parametrize("test_case", discover_test_cases(), ids=lambda tc: tc["test_name"])
def test_reference_components(test_case):
    """Test generated components against reference files"""
    components = _generator(test_case).generate_components()

    with open(test_case["reference_file"]) as f:
        reference = json.load(f)

    assert components == reference
    # Schemas keep declaration order
    assert list(components["components"]["schemas"]) == list(reference["components"]["schemas"])


@pytest.mark.parametrize(
    "test_case",
    [tc for tc in discover_test_cases() if tc["aliases_file"].exists()],
    ids=lambda tc: tc["test_name"],
)
def test_reference_type_aliases(test_case):
    """Test generated type alias declarations against reference files"""
    with open(test_case["aliases_file"]) as f:
        reference = f.read()

    assert _generator(test_case).generate_type_aliases() == reference


if __name__ == "__main__":
    pytest.main([__file__])
