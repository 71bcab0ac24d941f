"""Image tools: build, list, push, tag, remove and prune."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from dockhand.agent.tools.docker.base import (
    LARGE_BUFFER,
    DockerTool,
    ListingParams,
    NameList,
    RequiredStr,
    TimeoutParams,
    format_args,
    parse_listing,
)
from dockhand.docker.command import TimeoutBounds, key_value_flags
from dockhand.docker.parser import parse_reclaimed_space
from dockhand.docker.result import CommandResult

LONG_BOUNDS = TimeoutBounds(5, 1800, 300)
PRUNE_BOUNDS = TimeoutBounds(5, 300, 60)


class BuildImageParams(TimeoutParams):
    context: RequiredStr = Field(description="The build context (directory containing the Dockerfile)")
    tag: RequiredStr = Field(description="The tag to apply to the built image")
    dockerfile: str | None = Field(default=None, description="Path to the Dockerfile (relative to context)")
    build_args: dict[str, str] = Field(default_factory=dict, description="Build arguments to pass to the build")
    no_cache: bool = Field(default=False, description="Do not use cache when building the image")
    pull: bool = Field(default=False, description="Always pull newer versions of the base images")


class BuildImageTool(DockerTool):
    tool_name = "docker_build_image"
    tool_description = "Build a Docker image from a Dockerfile"
    params_model = BuildImageParams
    bounds = LONG_BOUNDS
    max_buffer = LARGE_BUFFER

    def build_args(self, params: BuildImageParams) -> list[str]:
        args = ["build", "-t", params.tag]
        if params.dockerfile:
            args.extend(["-f", params.dockerfile])
        args.extend(key_value_flags("--build-arg", params.build_args))
        if params.no_cache:
            args.append("--no-cache")
        if params.pull:
            args.append("--pull")
        args.append(params.context)
        return args

    def parse(self, params: BuildImageParams, result: CommandResult) -> dict[str, Any]:
        return {"tag": params.tag}

    def start_message(self, params: BuildImageParams) -> str:
        return f"Building image {params.tag}..."

    def success_message(self, params: BuildImageParams, result: CommandResult) -> str:
        return f"Successfully built image {params.tag}"


class ListImagesParams(ListingParams):
    all: bool = Field(default=False, description="Show all images (default hides intermediate images)")
    digests: bool = Field(default=False, description="Show digests")


class ListImagesTool(DockerTool):
    tool_name = "docker_list_images"
    tool_description = "List Docker images"
    params_model = ListImagesParams

    def build_args(self, params: ListImagesParams) -> list[str]:
        args = ["images"]
        if params.all:
            args.append("-a")
        if params.quiet:
            args.append("-q")
        if params.digests:
            args.append("--digests")
        if params.filter:
            args.extend(["--filter", params.filter])
        return args + format_args(params.format)

    def parse(self, params: ListImagesParams, result: CommandResult) -> dict[str, Any]:
        images, count = parse_listing(self.name, params.format, params.quiet, result.stdout)
        return {"images": images, "count": count}

    def start_message(self, params: ListImagesParams) -> str:
        return "Listing images..."

    def success_message(self, params: ListImagesParams, result: CommandResult) -> str:
        return f"Successfully listed {result['count']} image(s)"


class PushImageParams(TimeoutParams):
    tag: RequiredStr = Field(description="The image tag to push")
    all_tags: bool = Field(default=False, description="Push all tags of the image")


class PushImageTool(DockerTool):
    tool_name = "docker_push_image"
    tool_description = "Push a Docker image to a registry"
    params_model = PushImageParams
    bounds = LONG_BOUNDS
    max_buffer = LARGE_BUFFER

    def build_args(self, params: PushImageParams) -> list[str]:
        args = ["push"]
        if params.all_tags:
            args.append("--all-tags")
        args.append(params.tag)
        return args

    def parse(self, params: PushImageParams, result: CommandResult) -> dict[str, Any]:
        return {"tag": params.tag}

    def start_message(self, params: PushImageParams) -> str:
        return f"Pushing image {params.tag}..."

    def success_message(self, params: PushImageParams, result: CommandResult) -> str:
        return f"Successfully pushed image {params.tag}"


class TagImageParams(TimeoutParams):
    source_image: RequiredStr = Field(description="The source image to tag")
    target_image: RequiredStr = Field(description="The target image name and tag")


class TagImageTool(DockerTool):
    tool_name = "docker_tag_image"
    tool_description = "Create a tag that refers to a source Docker image"
    params_model = TagImageParams

    def build_args(self, params: TagImageParams) -> list[str]:
        return ["tag", params.source_image, params.target_image]

    def parse(self, params: TagImageParams, result: CommandResult) -> dict[str, Any]:
        return {"sourceImage": params.source_image, "targetImage": params.target_image}

    def start_message(self, params: TagImageParams) -> str:
        return f"Tagging image {params.source_image} as {params.target_image}..."

    def success_message(self, params: TagImageParams, result: CommandResult) -> str:
        return f"Successfully tagged image {params.source_image} as {params.target_image}"


class RemoveImageParams(TimeoutParams):
    images: NameList = Field(description="Image name(s) or ID(s)")
    force: bool = Field(default=False, description="Force removal of the image(s)")
    no_prune: bool = Field(default=False, description="Do not delete untagged parents")


class RemoveImageTool(DockerTool):
    tool_name = "docker_remove_image"
    tool_description = "Remove one or more Docker images"
    params_model = RemoveImageParams

    def build_args(self, params: RemoveImageParams) -> list[str]:
        args = ["rmi"]
        if params.force:
            args.append("-f")
        if params.no_prune:
            args.append("--no-prune")
        return args + params.images

    def parse(self, params: RemoveImageParams, result: CommandResult) -> dict[str, Any]:
        return {"images": params.images}

    def start_message(self, params: RemoveImageParams) -> str:
        return f"Removing image(s): {', '.join(params.images)}..."

    def success_message(self, params: RemoveImageParams, result: CommandResult) -> str:
        return f"Successfully removed image(s): {', '.join(params.images)}"


class PruneImagesParams(TimeoutParams):
    all: bool = Field(default=False, description="Remove all unused images, not just dangling ones")
    filter: str | None = Field(default=None, description="Filter images based on conditions provided")


class PruneImagesTool(DockerTool):
    tool_name = "docker_prune_images"
    tool_description = "Prune unused Docker images"
    params_model = PruneImagesParams
    bounds = PRUNE_BOUNDS

    def build_args(self, params: PruneImagesParams) -> list[str]:
        # -f: prune prompts for confirmation otherwise
        args = ["image", "prune", "-f"]
        if params.all:
            args.append("-a")
        if params.filter:
            args.extend(["--filter", params.filter])
        return args

    def parse(self, params: PruneImagesParams, result: CommandResult) -> dict[str, Any]:
        return {"spaceReclaimed": parse_reclaimed_space(result.stdout)}

    def start_message(self, params: PruneImagesParams) -> str:
        return "Pruning unused Docker images..."

    def success_message(self, params: PruneImagesParams, result: CommandResult) -> str:
        return f"Successfully pruned unused Docker images. Space reclaimed: {result['spaceReclaimed']}"
