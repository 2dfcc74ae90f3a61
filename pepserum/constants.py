"""Physical constants and residue masses for peptide weight calculations.

This module provides the reference masses used by pepserum: residue masses
in both monoisotopic and average flavours, the small molecules involved in
termini and cyclization chemistry, and the bridging reagent masses.

These values are raw data. The weight calculator never reads them directly;
it receives a :class:`pepserum.mass_table.MassTable` built from them, so an
alternate table can be substituted (e.g. in tests or from a JSON file).

Key Features
------------
- Monoisotopic and average residue masses for the 20 standard amino acids
- Water, hydrogen atom and hydrogen fluoride masses in both flavours
- Decafluorobiphenyl (DFBP) stapling reagent mass
- Piece delimiter used in two-piece fragment identifiers

Sources
-------
- NIST atomic weights: https://physics.nist.gov/cgi-bin/Compositions/stand_alone.pl
- Unimod residue masses: https://www.unimod.org/masses.html
"""

# =============================================================================
# Fragment Identifiers
# =============================================================================

# Joins the residue substrings of a bridge-connected two-piece fragment.
# Example: "YE#VKK" is residues 0-1 joined through a bridge to residues 7-9
PIECE_DELIMITER = "#"

# =============================================================================
# Monoisotopic Masses (Da)
# =============================================================================

# Hydrogen atom (NOT proton!)
# Source: NIST, 1H
H_MASS_MONO = 1.00782503207

# Water mass (H2O)
# Calculated: 2*1.007825 + 15.994915 = 18.010564684
H2O_MASS_MONO = 18.010564684

# Hydrogen fluoride (HF), the leaving group of SNAr cysteine arylation
# Calculated: 1.007825 + 18.998403 = 20.006228
HF_MASS_MONO = 20.00622819

# Decafluorobiphenyl (C12F10)
# Calculated: 12*12.000000 + 10*18.998403 = 333.984032
DFBP_MASS_MONO = 333.9840316

# Standard 20 amino acids (unmodified)
# Source: IUPAC/Unimod mass tables
# Values are monoisotopic masses of residues (not including N/C terminals)
AA_MASSES_MONO = {
    'A': 71.037114,   # Alanine
    'R': 156.101111,  # Arginine
    'N': 114.042927,  # Asparagine
    'D': 115.026943,  # Aspartic acid
    'C': 103.009185,  # Cysteine (unmodified)
    'E': 129.042593,  # Glutamic acid
    'Q': 128.058578,  # Glutamine
    'G': 57.021464,   # Glycine
    'H': 137.058912,  # Histidine
    'I': 113.084064,  # Isoleucine
    'L': 113.084064,  # Leucine
    'K': 128.094963,  # Lysine
    'M': 131.040485,  # Methionine
    'F': 147.068414,  # Phenylalanine
    'P': 97.052764,   # Proline
    'S': 87.032028,   # Serine
    'T': 101.047679,  # Threonine
    'W': 186.079313,  # Tryptophan
    'Y': 163.063320,  # Tyrosine
    'V': 99.068414,   # Valine
}

# =============================================================================
# Average Masses (Da)
# =============================================================================

# Average masses are what a "molecular weight" means to a peptide chemist
# reading a low-resolution serum stability trace, so they are the default.

H_MASS_AVG = 1.00794
H2O_MASS_AVG = 18.01528
HF_MASS_AVG = 20.00634

# C12F10: 12*12.0107 + 10*18.9984032
DFBP_MASS_AVG = 334.112432

AA_MASSES_AVG = {
    'A': 71.0788,
    'R': 156.1875,
    'N': 114.1038,
    'D': 115.0886,
    'C': 103.1388,
    'E': 129.1155,
    'Q': 128.1307,
    'G': 57.0519,
    'H': 137.1411,
    'I': 113.1594,
    'L': 113.1594,
    'K': 128.1741,
    'M': 131.1926,
    'F': 147.1766,
    'P': 97.1167,
    'S': 87.0782,
    'T': 101.1051,
    'W': 186.2132,
    'Y': 163.1760,
    'V': 99.1326,
}

# Residue codes accepted by default when validating a sequence
STANDARD_AMINO_ACIDS = frozenset(AA_MASSES_MONO)


# =============================================================================
# Mass Accuracy Validation
# =============================================================================

def validate_constants():
    """Validate that constants are physically reasonable.

    Raises AssertionError if any constant is out of expected range.
    This is a sanity check to catch copy-paste errors or typos.
    """
    assert 18.00 < H2O_MASS_MONO < 18.02, f"H2O_MASS_MONO is wrong: {H2O_MASS_MONO}"
    assert 18.00 < H2O_MASS_AVG < 18.02, f"H2O_MASS_AVG is wrong: {H2O_MASS_AVG}"

    # HF = H + F, so it must exceed H by ~19 Da in both flavours
    assert abs(HF_MASS_MONO - H_MASS_MONO - 18.998403) < 1e-5, \
        f"HF mass inconsistent: {HF_MASS_MONO}"

    assert set(AA_MASSES_MONO) == set(AA_MASSES_AVG), \
        "Monoisotopic and average residue tables cover different residues"

    for aa, mass in AA_MASSES_MONO.items():
        assert mass > 50.0, f"AA {aa} mass is too low: {mass}"
        assert mass < 250.0, f"AA {aa} mass is too high: {mass}"
        # Average mass is always slightly above monoisotopic for peptides
        assert 0.0 < AA_MASSES_AVG[aa] - mass < 0.2, \
            f"AA {aa} average mass inconsistent: {AA_MASSES_AVG[aa]}"
