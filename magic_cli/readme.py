"""
readme.py

Responsibility: render the generated README and the "next steps" commands.

Both depend on the selected package manager, so they are rendered from the
same command table.
"""

from __future__ import annotations

from jinja2 import Environment, StrictUndefined

from magic_cli.environment import PackageManager
from magic_cli.manifest import ProjectManifest

_COMMANDS: dict[PackageManager, dict[str, str]] = {
    PackageManager.PNPM: {"install": "pnpm install", "start": "pnpm run start", "build": "pnpm run build"},
    PackageManager.YARN: {"install": "yarn", "start": "yarn start", "build": "yarn build"},
    PackageManager.NPM: {"install": "npm install", "start": "npm start", "build": "npm run build"},
}

README_TEMPLATE = """\
# {{ name }}

{{ description }}

## Project setup

```
{{ commands.install }}
```

### Start the development server

```
{{ commands.start }}
```

### Build for production

```
{{ commands.build }}
```
{% if author %}
## Author

{{ author }}
{% endif %}"""

_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def package_commands(manager: PackageManager) -> dict[str, str]:
    # With no manager detected the README still documents the npm flow.
    return _COMMANDS.get(manager, _COMMANDS[PackageManager.NPM])


def generate_readme(manifest: ProjectManifest, manager: PackageManager) -> str:
    template = _env.from_string(README_TEMPLATE)
    return template.render(
        name=manifest.name,
        description=manifest.description,
        author=manifest.author,
        commands=package_commands(manager),
    )


def next_steps(project_name: str, manager: PackageManager, *, in_current_dir: bool) -> list[str]:
    steps: list[str] = []
    if not in_current_dir:
        steps.append(f"cd {project_name}")
    steps.append(package_commands(manager)["start"])
    return steps
