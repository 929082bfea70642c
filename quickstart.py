from pathlib import Path

import pandas as pd

import typeweave as tw


class ArtifactStore:
    """A service shared by every task of a build."""

    def __init__(self, root: str = "build"):
        self.root = Path(root)

    def location(self, name: str) -> Path:
        return self.root / name


class Signing:
    """Extension registered on packaging tasks."""

    def __init__(self):
        self._key_id = None

    def get_key_id(self) -> str | None:
        return self._key_id

    def set_key_id(self, value: str | None) -> None:
        self._key_id = value


class PackageTask:
    def __init__(self, name: str):
        self.name = name
        self._version = tw.Property(str)
        self._sources = tw.ListProperty(str)
        self._format = None
        self.steps = []

    @property
    @tw.inject
    def store(self) -> ArtifactStore:
        raise NotImplementedError

    @property
    def version(self) -> tw.Property[str]:
        return self._version

    @property
    def sources(self) -> tw.ListProperty[str]:
        return self._sources

    @property
    def format(self) -> str | None:
        return self._format

    @format.setter
    def format(self, value: str | None) -> None:
        self._format = value

    def step(self, name: str, action: tw.Action["PackageTask"]) -> None:
        action.execute(self)
        self.steps.append(name)

    def archive(self) -> Path:
        return self.store.location(f"{self.name}-{self.version.get()}.{self.format}")


if __name__ == "__main__":
    services = tw.DefaultServiceRegistry(ArtifactStore("dist"))
    instantiator = tw.DependencyInjectingInstantiator(services=services)

    task = instantiator.new_instance(PackageTask, "app")

    # Container-backed properties accept plain assignment
    task.version = "1.4.0"
    task.sources = ["src/app", "src/lib"]

    # Configuration methods accept closures as well as actions
    task.step("collect", tw.Closure(lambda t: t.sources.add("README.md")))

    # `format` falls back to a convention until it is assigned
    task.convention_mapping.map("format", "zip")
    print(task.archive())
    task.format = "tar.gz"
    print(task.archive())

    signing = task.extensions.create("signing", Signing)
    task.extensions.configure("signing", lambda s: s.set_key_id("0xCAFE"))
    print(signing.get_key_id(), task.signing is signing)

    augmented = tw.augment(PackageTask)
    print(augmented.constructors[0])

    claim_graph = tw.ClaimGraph(augmented)
    g = claim_graph.build(size=16, sink_source=True)
    g.render("assets/output/graphs/claim_graph", format="png", cleanup=True)

    claim_matrix: pd.DataFrame = claim_graph.build_matrix()
    Path("assets/output/matrix").mkdir(parents=True, exist_ok=True)
    claim_matrix.to_csv("assets/output/matrix/claim_matrix.csv")
