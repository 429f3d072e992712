#!/usr/bin/env python3
"""
Container definition templates with ${NAME} placeholders.
"""
import json
import os
import re

from .utils import DeployError

PLACEHOLDER_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

# A template without the image tag would register the same image on every run.
REQUIRED_PLACEHOLDERS = ('IMAGE_TAG',)


def render_template(text, values):
    """
    Replace ${NAME} tokens with values[NAME].
    Raises DeployError if any token has no value.
    """
    missing = sorted({name for name in PLACEHOLDER_PATTERN.findall(text) if values.get(name) is None})
    if missing:
        raise DeployError(f"No value for template placeholders: {', '.join(missing)}")
    return PLACEHOLDER_PATTERN.sub(lambda m: str(values[m.group(1)]), text)


def rendered_path(template_path):
    """Default output path: ecs-container-definitions.json -> ecs-container-definitions.rendered.json"""
    root, ext = os.path.splitext(template_path)
    return f"{root}.rendered{ext or '.json'}"


def render_template_file(template_path, values, output_path=None):
    """
    Render a container definitions template and write the result.
    Writes next to the template (see rendered_path) when output_path is not
    given, so the template keeps its placeholders. Returns the written path.
    """
    try:
        with open(template_path, "r") as f:
            text = f.read()
    except OSError as e:
        raise DeployError(f"Failed to read task definition template '{template_path}': {e}")

    present = set(PLACEHOLDER_PATTERN.findall(text))
    absent = [name for name in REQUIRED_PLACEHOLDERS if name not in present]
    if absent:
        raise DeployError(
            f"Task definition template '{template_path}' has no {', '.join('${' + n + '}' for n in absent)} placeholder"
        )
    rendered = render_template(text, values)

    try:
        definitions = json.loads(rendered)
    except ValueError as e:
        raise DeployError(f"Rendered task definition '{template_path}' is not valid JSON: {e}")
    if not isinstance(definitions, list):
        raise DeployError(f"Task definition template '{template_path}' must contain a list of container definitions")

    output_path = output_path or rendered_path(template_path)
    if os.path.abspath(output_path) == os.path.abspath(template_path):
        raise DeployError(f"Rendered task definition would overwrite its template '{template_path}'")
    try:
        with open(output_path, "w") as f:
            f.write(rendered)
    except OSError as e:
        raise DeployError(f"Failed to write rendered task definition '{output_path}': {e}")
    return output_path


def load_container_definitions(path):
    try:
        with open(path, "r") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise DeployError(f"Failed to load container definitions '{path}': {e}")
