"""Render the text of every file in a new project."""

from __future__ import annotations

import json
import re

from pkginit.config import PkgInitConfig
from pkginit.manifest import GeneratedFileSet, ProjectManifest

README = "README.md"
PACKAGE_JSON = "package.json"
GITIGNORE = ".gitignore"
JSHINTRC = ".jshintrc"
JSHINTIGNORE = ".jshintignore"
TRAVIS_YML = ".travis.yml"
TEST_STUB = "test/test.js"

ALWAYS_INCLUDED = frozenset({GITIGNORE, JSHINTRC, JSHINTIGNORE})
TEST_FILES = frozenset({TRAVIS_YML, TEST_STUB})

TEST_SCRIPT = "node test/test.js | tap-dot"

_BASE_DEV_DEPENDENCIES = {
    "jshint": "^2.9.5",
    "precommit-hook": "^3.0.0",
}
_TEST_DEV_DEPENDENCIES = {
    "tap-dot": "^2.0.0",
    "tape": "^4.9.0",
}

_GITIGNORE = """\
node_modules
npm-debug.log
*.log
.DS_Store
"""

_JSHINTIGNORE = """\
node_modules
"""

_JSHINTRC = """\
{
  "node": true,
  "curly": true,
  "eqeqeq": true,
  "freeze": true,
  "immed": true,
  "indent": 2,
  "latedef": false,
  "newcap": true,
  "noarg": true,
  "noempty": true,
  "nonbsp": true,
  "nonew": true,
  "plusplus": false,
  "quotmark": "single",
  "undef": true,
  "unused": false,
  "maxparams": 4,
  "maxdepth": 4,
  "maxlen": 120
}
"""

_TRAVIS_YML = """\
language: node_js
node_js:
  - "node"
  - "lts/*"
script: npm test
"""

_TEST_STUB = """\
'use strict';

var tape = require( 'tape' );

tape( 'interface', function ( test ){
  test.pass( 'replace this with real tests' );
  test.end();
});
"""

_STATIC_FILES = {
    GITIGNORE: _GITIGNORE,
    JSHINTIGNORE: _JSHINTIGNORE,
    JSHINTRC: _JSHINTRC,
    TRAVIS_YML: _TRAVIS_YML,
    TEST_STUB: _TEST_STUB,
}

_GITHUB_RE = re.compile(r"^https?://github\.com/([^/]+/[^/#?]+?)(?:\.git)?/?$")


def render_readme(manifest: ProjectManifest, config: PkgInitConfig | None = None) -> str:
    """Render README.md in the configured style ("plain" or "badges")."""
    config = config or PkgInitConfig()
    if config.readme.style == "badges":
        return _render_badges_readme(manifest)

    text = f"# {manifest.name}\n"
    if manifest.description:
        text += f"\n{manifest.description}\n"
    return text


def _render_badges_readme(manifest: ProjectManifest) -> str:
    name = manifest.name
    lines = [f"# {name}", ""]

    badges = [f"[![NPM](https://nodei.co/npm/{name}.png)](https://nodei.co/npm/{name}/)"]
    slug = _github_slug(manifest.repository_url)
    if manifest.include_tests and slug is not None:
        badges.append(
            f"[![Build Status](https://travis-ci.org/{slug}.svg?branch=master)]"
            f"(https://travis-ci.org/{slug})"
        )
    lines.extend(badges)
    lines.append("")

    if manifest.description:
        lines.extend([manifest.description, ""])

    lines.extend([
        "## Install",
        "",
        "```bash",
        f"npm install {name}",
        "```",
        "",
        "## Usage",
        "",
        "```javascript",
        f"var {_js_identifier(manifest.directory)} = require( '{name}' );",
        "```",
    ])

    if manifest.include_tests:
        lines.extend([
            "",
            "## Tests",
            "",
            "```bash",
            "npm test",
            "```",
        ])

    return "\n".join(lines) + "\n"


def _github_slug(url: str | None) -> str | None:
    if not url:
        return None
    m = _GITHUB_RE.match(url)
    return m.group(1) if m else None


def _js_identifier(name: str) -> str:
    """camelCase *name* on ``.``, ``_`` and ``-`` boundaries."""
    parts = [p for p in re.split(r"[._-]+", name) if p]
    if not parts:
        return "lib"
    ident = parts[0] + "".join(p[:1].upper() + p[1:] for p in parts[1:])
    if ident[0].isdigit():
        ident = "_" + ident
    return ident


def render_package_manifest(
    manifest: ProjectManifest, config: PkgInitConfig | None = None,
) -> str:
    """Render package.json with a fixed key order."""
    config = config or PkgInitConfig()

    scripts = {"lint": "jshint ."}
    if manifest.include_tests:
        scripts["test"] = TEST_SCRIPT
    scripts["validate"] = "npm ls"

    dev_dependencies = dict(_BASE_DEV_DEPENDENCIES)
    if manifest.include_tests:
        dev_dependencies.update(_TEST_DEV_DEPENDENCIES)

    pre_commit = ["lint", "validate"]
    if manifest.include_tests:
        pre_commit.append("test")

    pkg: dict[str, object] = {
        "name": manifest.name,
        "version": config.package.version,
        "description": manifest.description,
        "main": "index.js",
        "scripts": scripts,
    }
    if manifest.repository_url is not None:
        pkg["repository"] = {"type": "git", "url": manifest.repository_url}
    if manifest.bugs_url is not None:
        pkg["bugs"] = {"url": manifest.bugs_url}
    if manifest.homepage_url is not None:
        pkg["homepage"] = manifest.homepage_url
    pkg["keywords"] = list(manifest.keywords)
    pkg["author"] = config.package.author
    pkg["license"] = config.package.license
    pkg["devDependencies"] = dict(sorted(dev_dependencies.items()))
    pkg["pre-commit"] = pre_commit

    return json.dumps(pkg, indent=2, ensure_ascii=False) + "\n"


def select_optional_files(manifest: ProjectManifest) -> frozenset[str]:
    """Paths of the static files a project gets, beyond README and package.json."""
    if manifest.include_tests:
        return ALWAYS_INCLUDED | TEST_FILES
    return ALWAYS_INCLUDED


def render_files(
    manifest: ProjectManifest, config: PkgInitConfig | None = None,
) -> GeneratedFileSet:
    """Render every file of the project, keyed by relative path in sorted order."""
    files = {
        README: render_readme(manifest, config),
        PACKAGE_JSON: render_package_manifest(manifest, config),
    }
    for path in select_optional_files(manifest):
        files[path] = _STATIC_FILES[path]
    return dict(sorted(files.items()))
