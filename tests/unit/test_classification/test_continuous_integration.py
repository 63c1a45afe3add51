"""
Unit tests for CI provider detection and build URL derivation.
"""

import pytest

from develocity_conventions.classification import ContinuousIntegration, detect
from develocity_conventions.models import Environment


@pytest.mark.unit
class TestDetect:
    """Test cases for detect()."""

    def test_no_ci_variables_is_a_local_build(self):
        assert detect(Environment({"HOME": "/home/user", "PATH": "/usr/bin"})) is None

    def test_empty_environment_is_a_local_build(self):
        assert detect(Environment()) is None

    @pytest.mark.parametrize(
        "variable, expected",
        [
            ("bamboo_resultsUrl", ContinuousIntegration.BAMBOO),
            ("CIRCLE_BUILD_URL", ContinuousIntegration.CIRCLE_CI),
            ("GITHUB_ACTIONS", ContinuousIntegration.GITHUB_ACTIONS),
            ("JENKINS_URL", ContinuousIntegration.JENKINS),
            ("CI", ContinuousIntegration.CONCOURSE),
        ],
    )
    def test_each_provider_is_detected_from_its_variable(self, variable, expected):
        assert detect(Environment({variable: "value"})) is expected

    def test_presence_of_variable_is_enough(self):
        assert detect(Environment({"CI": None})) is ContinuousIntegration.CONCOURSE
        assert detect(Environment({"CI": ""})) is ContinuousIntegration.CONCOURSE

    def test_variable_names_are_case_sensitive(self):
        assert detect(Environment({"ci": "true", "jenkins_url": "x"})) is None

    def test_earlier_provider_in_catalogue_wins(self):
        env = Environment({"CI": "true", "JENKINS_URL": "https://jenkins.example.com"})
        assert detect(env) is ContinuousIntegration.JENKINS

    def test_bamboo_wins_over_every_other_provider(self):
        env = Environment({
            "CI": "true",
            "JENKINS_URL": "https://jenkins.example.com",
            "GITHUB_ACTIONS": "true",
            "CIRCLE_BUILD_URL": "https://circleci.example.com",
            "bamboo_resultsUrl": "https://bamboo.example.com",
        })
        assert detect(env) is ContinuousIntegration.BAMBOO

    def test_catalogue_order(self):
        assert [ci.display_name for ci in ContinuousIntegration] == [
            "Bamboo", "CircleCI", "GitHub Actions", "Jenkins", "Concourse",
        ]


@pytest.mark.unit
class TestBuildUrl:
    """Test cases for build URL derivation."""

    def test_bamboo_build_url_is_the_results_url(self):
        env = Environment({"bamboo_resultsUrl": "https://bamboo.example.com"})
        assert ContinuousIntegration.BAMBOO.build_url_from(env) == "https://bamboo.example.com"

    def test_circle_ci_build_url_is_the_build_url(self):
        env = Environment({"CIRCLE_BUILD_URL": "https://circleci.example.com/gh/org/project/123"})
        assert (
            ContinuousIntegration.CIRCLE_CI.build_url_from(env)
            == "https://circleci.example.com/gh/org/project/123"
        )

    def test_github_actions_build_url_is_composed(self):
        env = Environment({
            "GITHUB_ACTIONS": "true",
            "GITHUB_SERVER_URL": "https://github.com",
            "GITHUB_REPOSITORY": "spring-projects/spring-boot",
            "GITHUB_RUN_ID": "1234567890",
        })
        assert (
            ContinuousIntegration.GITHUB_ACTIONS.build_url_from(env)
            == "https://github.com/spring-projects/spring-boot/actions/runs/1234567890"
        )

    def test_github_actions_build_url_with_missing_inputs_contains_null(self):
        env = Environment({"GITHUB_ACTIONS": "true"})
        assert ContinuousIntegration.GITHUB_ACTIONS.build_url_from(env) == "null/null/actions/runs/null"

    def test_jenkins_build_url_is_build_url_variable(self):
        env = Environment({
            "JENKINS_URL": "https://jenkins.example.com",
            "BUILD_URL": "https://jenkins.example.com/builds/123",
        })
        assert ContinuousIntegration.JENKINS.build_url_from(env) == "https://jenkins.example.com/builds/123"

    def test_jenkins_without_build_url_has_none(self):
        env = Environment({"JENKINS_URL": "https://jenkins.example.com"})
        assert ContinuousIntegration.JENKINS.build_url_from(env) is None

    def test_concourse_has_no_build_url(self):
        assert ContinuousIntegration.CONCOURSE.build_url_from(Environment({"CI": "true"})) is None

    def test_str_is_display_name(self):
        assert str(ContinuousIntegration.GITHUB_ACTIONS) == "GitHub Actions"
