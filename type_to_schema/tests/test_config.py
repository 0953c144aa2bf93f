from unittest import TestCase

from type_to_schema import PipelineGenerator, SchemaGeneratorConfig
from type_to_schema.pipeline.config import DEFAULT_REFERENCE_PREFIX


class TestSchemaGeneratorConfig(TestCase):
    def test_defaults(self):
        config = SchemaGeneratorConfig()
        self.assertTrue(config.repr_enums)
        self.assertEqual(config.reference_prefix, DEFAULT_REFERENCE_PREFIX)
        self.assertFalse(config.reject_heterogeneous_tuples)

    def test_from_dict_ignores_unknown_keys(self):
        config = SchemaGeneratorConfig.from_dict({"repr_enums": False, "not_an_option": 1})
        self.assertFalse(config.repr_enums)
        self.assertFalse(hasattr(config, "not_an_option"))

    def test_round_trip(self):
        values = {"repr_enums": False, "reference_prefix": "#/definitions/", "reject_heterogeneous_tuples": True}
        self.assertEqual(SchemaGeneratorConfig.from_dict(values).to_dict(), values)

    def test_reference_prefix_used_for_components(self):
        config = SchemaGeneratorConfig(reference_prefix="#/definitions/")
        generator = PipelineGenerator(
            {"kind": "struct", "name": "Owner", "fields": [{"name": "pet", "type": "Pet"}]},
            config,
        )
        schemas = generator.generate_components()["components"]["schemas"]
        self.assertEqual(schemas["Owner"]["properties"]["pet"], {"$ref": "#/definitions/Pet"})
