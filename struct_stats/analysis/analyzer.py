"""Structure analysis pipeline: RDF, coordination numbers and bond angles."""

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

from ..core.cell import Cell
from ..io.structure_reader import read_structure
from .input_parameters import AnalysisParameters
from .properties import RDF, BondAngleDistribution, CoordinationNumber
from .validation import validate_parameters

if TYPE_CHECKING:
    from ..utils.logger import StatsLogger

PLOT_SUFFIXES = {"matplotlib": ".png", "plotly": ".html"}


class StructureAnalyzer:
    """Compute RDF, CN and BAD histograms of one structure and write them out."""

    def __init__(self, parameters: AnalysisParameters):
        """
        Initialize the analyzer.

        Args:
            parameters: Analysis parameters

        Raises:
            ValueError: If parameters are invalid
        """
        self.parameters = parameters
        validate_parameters(self.parameters)

        # Setup logger
        self.logger: "StatsLogger | None" = None
        if self.parameters.log:
            if self.parameters.logger is not None:
                self.logger = self.parameters.logger
            else:
                from ..utils.logger import StatsLogger

                self.logger = StatsLogger()

        self.cell: Cell | None = None
        self.rdf: RDF | None = None
        self.cn: CoordinationNumber | None = None
        self.bad: BondAngleDistribution | None = None

        if self.logger:
            self.logger.info("Initializing StructureAnalyzer")
            self.logger.info(f"Structure: {self.parameters.structure_file}")
            self.logger.info(
                f"Cutoff: {self.parameters.cutoff} Å, RDF bin: {self.parameters.rdf_bin_width} Å"
            )
            self.logger.info(f"Bond factor: {self.parameters.bond_factor}")

    @contextmanager
    def _stage(self, name: str) -> Iterator[None]:
        """Re-raise any failure inside the block as a RuntimeError naming the stage."""
        if self.logger:
            self.logger.step(f"{name.capitalize()}...")
        try:
            yield
        except Exception as e:
            error_msg = f"{name.capitalize()} failed for {self.parameters.structure_file}: {e}"
            if self.logger:
                self.logger.error(error_msg)
            raise RuntimeError(error_msg) from e

    def load(self) -> Cell:
        """
        Read the structure file.

        Returns:
            Cell of the selected frame
        """
        with self._stage("load"):
            self.cell = read_structure(
                self.parameters.structure_file,
                file_format=self.parameters.file_format,
                index=self.parameters.index,
            )

        if self.logger:
            lattice = self.cell.lattice
            self.logger.info(f"Read {self.cell.n_atoms} atoms: {self.cell.count_elements()}")
            self.logger.info(
                "Lattice: a={:.4f} b={:.4f} c={:.4f} Å, α={:.2f} β={:.2f} γ={:.2f}°".format(
                    *lattice.parameters
                )
            )
            self.logger.info(f"Volume: {lattice.volume:.3f} Å³")
        return self.cell

    def run(self) -> dict[str, list[Path]]:
        """
        Run every analysis pass and write the results.

        Returns:
            Written files keyed by property ("rdf", "cn", "bad", "plots")

        Raises:
            RuntimeError: If any stage fails
        """
        if self.cell is None:
            self.load()

        params = self.parameters

        with self._stage("bonding"):
            self.rdf = RDF(self.cell, logger=self.logger)
            self.rdf.compute(
                cutoff=params.cutoff,
                bond_factor=params.bond_factor,
                bin_width=params.rdf_bin_width,
                radii=params.radii,
            )

        with self._stage("coordination"):
            self.cn = CoordinationNumber(self.cell, self.rdf.bonding, logger=self.logger)
            self.cn.compute()

        with self._stage("bond angles"):
            self.bad = BondAngleDistribution(self.cell, self.rdf.bonding, logger=self.logger)
            self.bad.compute(bin_width=params.bad_bin_width, degrees=params.degrees)

        with self._stage("export"):
            written = self._write_outputs()

        if self.logger:
            n_files = sum(len(paths) for paths in written.values())
            self.logger.success(f"Analysis complete, wrote {n_files} file(s)")
        return written

    def _write_outputs(self) -> dict[str, list[Path]]:
        params = self.parameters
        prefix = Path(params.output_prefix)
        calculators = {"rdf": self.rdf, "cn": self.cn, "bad": self.bad}

        written: dict[str, list[Path]] = {}
        for name, calculator in calculators.items():
            if params.save_format == "csv":
                # CSV files are named <prefix>_<table>.csv
                target = prefix.parent / f"{prefix.name}.csv"
            else:
                target = prefix.parent / f"{prefix.name}_{name}.{params.save_format}"
            written[name] = calculator.save(target, format=params.save_format)

        if params.plot_backend:
            suffix = PLOT_SUFFIXES[params.plot_backend]
            written["plots"] = []
            for name, calculator in calculators.items():
                plot_path = prefix.parent / f"{prefix.name}_{name}{suffix}"
                calculator.plot(backend=params.plot_backend, output=plot_path)
                written["plots"].append(plot_path)

        if self.logger:
            for name, paths in written.items():
                for path in paths:
                    self.logger.info(f"  {name}: {path}")
        return written

    def summary(self) -> dict[str, float]:
        """Mean coordination of every (center, neighbor) pair present in the cell."""
        if self.cn is None or self.cn.results is None:
            raise RuntimeError("No results to summarize. Run run() first.")
        return {label: self.cn.get_mean_coordination(label) for label in self.cn.results["CN"].labels}
