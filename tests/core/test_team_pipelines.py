from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from buildkite_provider.core.client import BuildkiteClient
from buildkite_provider.core.exceptions import NotFoundError
from buildkite_provider.core.models import Node, TeamPipeline, TeamPipelineAccessLevel


def team_pipeline_node(access_level: str = "READ_ONLY") -> dict:
    return {
        "id": "VGVhbVBpcGVsaW5lLS0tdHAx",
        "uuid": "tp1",
        "accessLevel": access_level,
        "createdAt": "2020-01-01T00:00:00Z",
        "team": {"id": "VGVhbS0tLXQx"},
        "pipeline": {"id": "UGlwZWxpbmUtLS0x", "slug": "web"},
    }


def test_create_read_only_is_one_call(
    client: BuildkiteClient,
    mock_request: MagicMock,
    graphql_data: Callable[..., MagicMock],
    request_body: Callable,
) -> None:
    """Test that READ_ONLY access needs a single mutation when the pipeline id is known."""
    mock_request.return_value = graphql_data(
        {"teamPipelineCreate": {"teamPipelineEdge": {"node": team_pipeline_node()}}},
    )
    desired = TeamPipeline(team=Node(id="VGVhbS0tLXQx"), pipeline=Node(id="UGlwZWxpbmUtLS0x", slug="web"))

    created = client.team_pipelines.create(desired)

    if mock_request.call_count != 1:
        pytest.fail(f"Expected one call, got {mock_request.call_count}")
    if request_body(mock_request.call_args)["variables"]["input"] != {
        "teamID": "VGVhbS0tLXQx",
        "pipelineID": "UGlwZWxpbmUtLS0x",
    }:
        pytest.fail("Unexpected create input")
    if created.pipeline.slug != "web" or created.access_level is not TeamPipelineAccessLevel.READ_ONLY:
        pytest.fail(f"Unexpected team pipeline: {created}")


def test_create_with_higher_access_is_two_calls(
    client: BuildkiteClient,
    mock_request: MagicMock,
    graphql_data: Callable[..., MagicMock],
    request_body: Callable,
) -> None:
    """Test that BUILD_AND_READ access is applied by a follow-up update."""
    mock_request.side_effect = [
        graphql_data({"teamPipelineCreate": {"teamPipelineEdge": {"node": team_pipeline_node()}}}),
        graphql_data({"teamPipelineUpdate": {"teamPipeline": team_pipeline_node("BUILD_AND_READ")}}),
    ]
    desired = TeamPipeline(
        team=Node(id="VGVhbS0tLXQx"),
        pipeline=Node(id="UGlwZWxpbmUtLS0x", slug="web"),
        access_level=TeamPipelineAccessLevel.BUILD_AND_READ,
    )

    created = client.team_pipelines.create(desired)

    if mock_request.call_count != 2:  # noqa: PLR2004
        pytest.fail(f"Expected two calls, got {mock_request.call_count}")
    if request_body(mock_request.call_args)["variables"]["input"] != {
        "id": "VGVhbVBpcGVsaW5lLS0tdHAx",
        "accessLevel": "BUILD_AND_READ",
    }:
        pytest.fail("Unexpected update input")
    if created.access_level is not TeamPipelineAccessLevel.BUILD_AND_READ:
        pytest.fail(f"Expected BUILD_AND_READ, got {created.access_level}")


def test_create_by_slug_looks_up_pipeline(
    client: BuildkiteClient,
    mock_request: MagicMock,
    graphql_data: Callable[..., MagicMock],
    request_body: Callable,
) -> None:
    """Test that a pipeline referenced by slug is resolved to its node id."""
    mock_request.side_effect = [
        graphql_data({"pipeline": {"id": "UGlwZWxpbmUtLS0x"}}),
        graphql_data({"teamPipelineCreate": {"teamPipelineEdge": {"node": team_pipeline_node()}}}),
    ]
    desired = TeamPipeline(team=Node(id="VGVhbS0tLXQx"), pipeline=Node(slug="web"))

    client.team_pipelines.create(desired)

    lookup, create = mock_request.call_args_list
    if request_body(lookup)["variables"] != {"pipelineSlug": "acme/web"}:
        pytest.fail("Expected a pipeline id lookup")
    if request_body(create)["variables"]["input"]["pipelineID"] != "UGlwZWxpbmUtLS0x":
        pytest.fail("Expected the resolved pipeline id")


def test_create_for_missing_pipeline(
    client: BuildkiteClient,
    mock_request: MagicMock,
    graphql_data: Callable[..., MagicMock],
) -> None:
    """Test that an unknown pipeline slug is a NotFoundError."""
    mock_request.return_value = graphql_data({"pipeline": None})

    with pytest.raises(NotFoundError) as exc_info:
        client.team_pipelines.create(TeamPipeline(team=Node(id="VGVhbS0tLXQx"), pipeline=Node(slug="web")))

    if "failed to create team pipeline for pipeline web" not in str(exc_info.value):
        pytest.fail(f"Expected context in the message, got {exc_info.value}")


def test_get_and_delete(
    client: BuildkiteClient,
    mock_request: MagicMock,
    graphql_data: Callable[..., MagicMock],
) -> None:
    """Test reading, deleting and reading again."""
    mock_request.side_effect = [
        graphql_data({"teamPipeline": team_pipeline_node("MANAGE_BUILD_AND_READ")}),
        graphql_data({"teamPipelineDelete": {"deletedTeamPipelineID": "VGVhbVBpcGVsaW5lLS0tdHAx"}}),
        graphql_data({"teamPipeline": None}),
    ]

    team_pipeline = client.team_pipelines.get("VGVhbVBpcGVsaW5lLS0tdHAx")
    if team_pipeline.access_level is not TeamPipelineAccessLevel.MANAGE_BUILD_AND_READ:
        pytest.fail(f"Unexpected access level: {team_pipeline.access_level}")

    client.team_pipelines.delete("VGVhbVBpcGVsaW5lLS0tdHAx")
    with pytest.raises(NotFoundError):
        client.team_pipelines.get("VGVhbVBpcGVsaW5lLS0tdHAx")
