#!/usr/bin/env python
"""
Example: Structural statistics of simple crystals.

This example demonstrates how to:
1. Write reference crystals with ASE (rock salt, diamond Si, fcc Cu)
2. Run the struct-stats CLI on them with different bonding settings
3. Use the Python API to inspect coordination numbers and bond angles
"""

import subprocess
from pathlib import Path

from ase.build import bulk
from ase.io import write

from struct_stats import AnalysisParameters, StructureAnalyzer

# Create output directory
output_dir = Path("crystal_statistics")
output_dir.mkdir(exist_ok=True)

# Step 1: Reference structures
print("Step 1: Writing reference structures...")
structures = {
    "nacl": bulk("NaCl", "rocksalt", a=5.64, cubic=True).repeat((2, 2, 2)),
    "si": bulk("Si", "diamond", a=5.43, cubic=True).repeat((2, 2, 2)),
    "cu": bulk("Cu", "fcc", a=3.61, cubic=True).repeat((3, 3, 3)),
}
for name, atoms in structures.items():
    write(output_dir / f"{name}.vasp", atoms, format="vasp")
    print(f"✓ Created {name}.vasp ({len(atoms)} atoms)")

# Step 2: CLI with default settings
print("\nStep 2: Analyzing with default settings (cutoff 6 Å, bond factor 1.2)...")
for name in structures:
    cmd = [
        "struct-stats", "analyze", str(output_dir / f"{name}.vasp"),
        "--output-prefix", str(output_dir / name),
        "--plot-backend", "matplotlib",
    ]
    subprocess.run(cmd, check=True)
    print(f"✓ Wrote {name}_J.csv, {name}_g.csv, {name}_CN.csv, {name}_BAD.csv")

# Step 3: Radius overrides for ionic bonding
# Na-Na sits right at the covalent bond threshold
print("\nStep 3: Rock salt with ionic radii...")
cmd = [
    "struct-stats", "analyze", str(output_dir / "nacl.vasp"),
    "--output-prefix", str(output_dir / "nacl_ionic"),
    "--radius", "Na=1.02", "Cl=1.81",
    "--bond-factor", "1.05",
    "--save-format", "json",
]
subprocess.run(cmd, check=True)
print("✓ Wrote nacl_ionic_rdf.json, nacl_ionic_cn.json, nacl_ionic_bad.json")

# Step 4: Python API
print("\nStep 4: Inspecting results through the Python API...")
params = AnalysisParameters(
    structure_file=str(output_dir / "si.vasp"),
    output_prefix=str(output_dir / "si_api"),
    cutoff=5.0,
    rdf_bin_width=0.02,
)
analyzer = StructureAnalyzer(params)
analyzer.run()

r_peak, g_peak = analyzer.rdf.get_first_peak("Si-Si")
print(f"  First g(r) peak: r = {r_peak:.2f} Å, g = {g_peak:.1f}")
print(f"  Mean Si-Si coordination: {analyzer.cn.get_mean_coordination('Si-Si'):.2f}")
print(f"  Most common Si-Si-Si angle: {analyzer.bad.get_peak_angle('Si-Si-Si'):.0f}°")

print("\n" + "=" * 60)
print("Crystal statistics complete!")
print(f"Results in {output_dir}/")
