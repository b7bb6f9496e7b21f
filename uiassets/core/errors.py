from __future__ import annotations


class AssetBuildError(Exception):
    """Base class for every fatal error that aborts an asset build."""


class MissingDependencyError(AssetBuildError):
    def __init__(self, basename: str, dependency: str):
        self.basename = basename
        self.dependency = dependency
        super().__init__(f"{basename}: missing {dependency}")


class ImportParseError(AssetBuildError):
    def __init__(self, statement: str):
        self.statement = statement
        super().__init__(f"Cannot parse import: {statement}")


class UnknownTaskError(AssetBuildError):
    pass


class CircularTaskError(AssetBuildError):
    pass


class SourceTreeError(AssetBuildError):
    pass


class ManifestDriftError(AssetBuildError):
    pass
