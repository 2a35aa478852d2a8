"""Tests for the template catalog."""

import pytest
import yaml

from quote_link.catalog import PackageTemplate, TemplateCatalog, load_default_catalog
from quote_link.models import InsurancePlan, PlanType


def _template(name, plans=1):
    return PackageTemplate(
        name=name,
        description=f"{name} package",
        plan_types=(PlanType.DENTAL,),
        default_plans=tuple(
            InsurancePlan(type=PlanType.DENTAL, name=f"{name} plan {i}", provider="Ameritas")
            for i in range(plans)
        ),
    )


class TestBundledCatalog:
    """The shipped catalog keeps its order; issued links depend on it."""

    def test_template_order(self, catalog):
        assert catalog.names() == ["Bronze", "Silver", "Gold", "Healthy Bundle"]

    def test_plan_counts(self, catalog):
        assert [len(t.default_plans) for t in catalog] == [4, 7, 8, 5]

    def test_first_plan_of_each_template(self, catalog):
        assert [t.default_plans[0].type for t in catalog] == [
            PlanType.HEALTH,
            PlanType.HEALTH,
            PlanType.HEALTH,
            PlanType.KONNECT,
        ]

    def test_gold_health_defaults(self, catalog):
        plan = catalog.get("Gold").default_plans[0]
        assert plan.name == "ACA Gold Health Plan"
        assert plan.monthly_premium == 550
        assert plan.deductible == 2500
        assert plan.out_of_pocket_max == 20
        assert plan.primary_care_copay == 0

    def test_default_catalog_is_cached(self):
        assert load_default_catalog() is load_default_catalog()


class TestTemplateCatalog:
    """Test lookups and invariants."""

    def test_lookup_by_name_and_index(self):
        catalog = TemplateCatalog([_template("A"), _template("B")])

        assert catalog.index_of("B") == 1
        assert catalog.index_of("Z") is None
        assert catalog.at(0).name == "A"
        assert catalog.at(2) is None
        assert catalog.at(-1) is None
        assert catalog.get("A").description == "A package"
        assert catalog.get("Z") is None
        assert "A" in catalog
        assert len(catalog) == 2

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            TemplateCatalog([_template("A"), _template("A")])

    def test_template_without_plans_rejected(self):
        with pytest.raises(ValueError):
            _template("Empty", plans=0).validate_invariants()

    def test_default_plan_returns_copy(self):
        template = _template("A")
        plan = template.default_plan(0)
        plan.monthly_premium = 999

        assert template.default_plans[0].monthly_premium == 0
        assert template.default_plan(1) is None


class TestFromYaml:
    """Test loading catalogs from YAML files."""

    def test_load(self, tmp_path):
        path = tmp_path / "templates.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "templates": [
                        {
                            "name": "Basic",
                            "description": "Basic cover",
                            "plan_types": ["vision"],
                            "default_plans": [
                                {
                                    "type": "vision",
                                    "name": "Basic Vision",
                                    "provider": "Ameritas",
                                    "monthly_premium": 9.5,
                                }
                            ],
                        }
                    ]
                }
            )
        )

        catalog = TemplateCatalog.from_yaml(path)

        assert catalog.names() == ["Basic"]
        assert catalog.get("Basic").default_plans[0].type is PlanType.VISION

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TemplateCatalog.from_yaml(tmp_path / "missing.yaml")

    @pytest.mark.parametrize(
        "content",
        [
            "- just a list",
            "templates: nope",
            "templates:\n  - name: X\n",
            "templates:\n  - name: X\n    default_plans: []\n",
            "templates:\n  - name: X\n    default_plans:\n      - {type: spaceship, name: Y, provider: Z}\n",
        ],
    )
    def test_invalid_structure(self, tmp_path, content):
        path = tmp_path / "templates.yaml"
        path.write_text(content)
        with pytest.raises(ValueError):
            TemplateCatalog.from_yaml(path)
