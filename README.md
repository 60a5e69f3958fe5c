# shipwright

shipwright models a C++ project as a build tool sees it. It reads the
`shipwright.toml` manifest, finds a package's binaries, library, tests,
examples and benches from its directory layout, and resolves conan and git
dependencies.

## Manifest

A package declares its name, version, C++ standard, dependencies and
per-profile build options:

```toml
[package]
name = "demo"
version = "0.1.0"
std = 17

[dependencies]
fmt = "10.0.0"
boost = { version = "1.81.0", components = ["headers"], options = { header_only = true } }
mylib = { git = "https://git.example.com/mylib.git", commit = "abc123" }

[dev-dependencies]
gtest = "1.13.0"

[profile]
cxxflags = ["-Wall"]

[profile.debug]
asan = true

[target.'cfg(os = "linux")'.profile]
definitions = ["ON_LINUX"]
```

`std` defaults to 17 and must be one of 11, 14, 17, 20 or 23. A package may
not declare the same dependency twice, and `tsan` cannot be combined with
`asan` or `leak`.

A manifest holding a `[workspace]` table with `members` describes a
workspace instead; each member directory has its own `shipwright.toml`.
Member dependencies are merged, and a package declared incompatibly by two
members is an error.

Load a manifest with `shipwright.manifest.Manifest`:

```python
from pathlib import Path

from shipwright.manifest import Manifest
from shipwright.profile import Profile

manifest = Manifest(Path("shipwright.toml"))
if not manifest.is_workspace():
    package = manifest.get_if_package()
    print(package.name, package.version, package.cxx_std)
    print(package.profile(Profile.DEBUG))
else:
    for path, member in manifest.list_packages().items():
        print(path, member.name)
```

`generate_manifest(name, std, directory)` writes a fresh manifest together
with `.clang-format`, `.clang-tidy` and `.gitignore`;
`generate_bin_template` and `generate_lib_template` in `shipwright.template`
add starter sources under `src/` or `include/` and `lib/`.

## Conditions

Target sections are keyed by a `cfg(...)` predicate over `os`
(`windows`, `linux`, `macos`) and `compiler` (`gcc`, `msvc`, `clang`,
`apple_clang`), combined with `all(...)`, `any(...)` and `not(...)`:

```python
from shipwright.cfg import parse_cfg

predicate = parse_cfg('cfg(all(os = "linux", not(compiler = "clang")))')
```

The result is built from the `Os` and `Compiler` enums and the `CfgAll`,
`CfgAny` and `CfgNot` dataclasses. Malformed input raises
`ManifestCfgParseError`.

## Layout and workspaces

`shipwright.layout.Layout(root, name)` scans one package directory:

- `src/bin/*.cpp` — one binary per file
- other `src/**/*.cpp` — the binary named after the package
- `lib/**/*.cpp` and `include/` — the package library; `lib/**/*_test.cpp` are tests
- `tests/**/*.cpp` — tests, named after their path (`a/b/c.cpp` becomes `a_b_c`)
- `examples/*.cpp`, `benches/*.cpp` — examples and benches

Conflicting binary or test names raise `LayoutError`.

`shipwright.workspace.Workspace` holds a layout for every package of a
manifest and rejects binaries with the same name in two packages:

```python
from shipwright.workspace import Workspace

workspace = Workspace(Path("."), manifest)
for layout in workspace.layouts():
    print(layout.package, [target.name for target in layout.binaries()])
```

`shipwright.repo` finds the package and project roots from the working
directory and lists source files, including those changed against a git
commit (`list_changed_files`).

## Dependencies

`shipwright.resolver.Resolver` follows git dependencies transitively: each is
fetched into a dependencies directory through a fetcher callable (for example
`shipwright.git.git_clone`), and its own manifest, if any, contributes further
dependencies. Conan dependencies are collected as they are declared.

```python
from shipwright.git import git_clone
from shipwright.resolver import Resolver

result = Resolver.from_manifest(Path("build/deps"), manifest, git_clone).resolve()
print([dep.package for dep in result.dependencies])
```

`shipwright.dependency.collect_conan_deps` reads the cmake target files that
conan generates and returns them as `ResolvedDependencies`.

## Other helpers

- `shipwright.cmd`: `has_cmd`, `require_cmd`, `run_cmd`, `check_output` and
  `CmdRunner`, which runs shell commands or hands them to a hook.
- `shipwright.compiler`: `CompilerInfo.detect()` finds the host compiler
  (`$CXX`, else `g++`, else `clang++`), its major version and standard library.
- `shipwright.log`: `status`, `debug`, `warn` and `error` messages with
  right-aligned tags, and `set_level`.

## What it does not do

shipwright is a library only. It has no command-line program, does not
generate CMake files, and does not run builds, tests, formatters or linters
itself; those are left to the code that uses it.

## Errors

Every failure is raised as `shipwright.errors.Error` or one of its
subclasses, such as `CmdNotFound` when a required external tool is missing,
`RunCmdFailed` when a command exits with a non-zero status, and
`LayoutError` when a package layout is inconsistent.