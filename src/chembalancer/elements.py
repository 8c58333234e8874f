"""Periodic table data.

Holds the 118 elements plus deuterium (``D``), which is accepted in formulas
such as ``D2O``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class ElementData:
    symbol: str
    name: str
    atomic_number: int
    atomic_mass: float  # g/mol
    category: str


_ELEMENT_ROWS = [
    ("H", "Hydrogen", 1, 1.008, "nonmetal"),
    ("He", "Helium", 2, 4.003, "noble-gas"),
    ("Li", "Lithium", 3, 6.941, "alkali-metal"),
    ("Be", "Beryllium", 4, 9.012, "alkaline-earth-metal"),
    ("B", "Boron", 5, 10.81, "metalloid"),
    ("C", "Carbon", 6, 12.01, "nonmetal"),
    ("N", "Nitrogen", 7, 14.01, "nonmetal"),
    ("O", "Oxygen", 8, 16.00, "nonmetal"),
    ("F", "Fluorine", 9, 19.00, "halogen"),
    ("Ne", "Neon", 10, 20.18, "noble-gas"),
    ("Na", "Sodium", 11, 22.99, "alkali-metal"),
    ("Mg", "Magnesium", 12, 24.31, "alkaline-earth-metal"),
    ("Al", "Aluminum", 13, 26.98, "post-transition-metal"),
    ("Si", "Silicon", 14, 28.09, "metalloid"),
    ("P", "Phosphorus", 15, 30.97, "nonmetal"),
    ("S", "Sulfur", 16, 32.07, "nonmetal"),
    ("Cl", "Chlorine", 17, 35.45, "halogen"),
    ("Ar", "Argon", 18, 39.95, "noble-gas"),
    ("K", "Potassium", 19, 39.10, "alkali-metal"),
    ("Ca", "Calcium", 20, 40.08, "alkaline-earth-metal"),
    ("Sc", "Scandium", 21, 44.96, "transition-metal"),
    ("Ti", "Titanium", 22, 47.87, "transition-metal"),
    ("V", "Vanadium", 23, 50.94, "transition-metal"),
    ("Cr", "Chromium", 24, 52.00, "transition-metal"),
    ("Mn", "Manganese", 25, 54.94, "transition-metal"),
    ("Fe", "Iron", 26, 55.85, "transition-metal"),
    ("Co", "Cobalt", 27, 58.93, "transition-metal"),
    ("Ni", "Nickel", 28, 58.69, "transition-metal"),
    ("Cu", "Copper", 29, 63.55, "transition-metal"),
    ("Zn", "Zinc", 30, 65.38, "transition-metal"),
    ("Ga", "Gallium", 31, 69.72, "post-transition-metal"),
    ("Ge", "Germanium", 32, 72.64, "metalloid"),
    ("As", "Arsenic", 33, 74.92, "metalloid"),
    ("Se", "Selenium", 34, 78.97, "nonmetal"),
    ("Br", "Bromine", 35, 79.90, "halogen"),
    ("Kr", "Krypton", 36, 83.80, "noble-gas"),
    ("Rb", "Rubidium", 37, 85.47, "alkali-metal"),
    ("Sr", "Strontium", 38, 87.62, "alkaline-earth-metal"),
    ("Y", "Yttrium", 39, 88.91, "transition-metal"),
    ("Zr", "Zirconium", 40, 91.22, "transition-metal"),
    ("Nb", "Niobium", 41, 92.91, "transition-metal"),
    ("Mo", "Molybdenum", 42, 95.95, "transition-metal"),
    ("Tc", "Technetium", 43, 98.00, "transition-metal"),
    ("Ru", "Ruthenium", 44, 101.1, "transition-metal"),
    ("Rh", "Rhodium", 45, 102.9, "transition-metal"),
    ("Pd", "Palladium", 46, 106.4, "transition-metal"),
    ("Ag", "Silver", 47, 107.9, "transition-metal"),
    ("Cd", "Cadmium", 48, 112.4, "transition-metal"),
    ("In", "Indium", 49, 114.8, "post-transition-metal"),
    ("Sn", "Tin", 50, 118.7, "post-transition-metal"),
    ("Sb", "Antimony", 51, 121.8, "metalloid"),
    ("Te", "Tellurium", 52, 127.6, "metalloid"),
    ("I", "Iodine", 53, 126.9, "halogen"),
    ("Xe", "Xenon", 54, 131.3, "noble-gas"),
    ("Cs", "Cesium", 55, 132.9, "alkali-metal"),
    ("Ba", "Barium", 56, 137.3, "alkaline-earth-metal"),
    ("La", "Lanthanum", 57, 138.9, "lanthanide"),
    ("Ce", "Cerium", 58, 140.1, "lanthanide"),
    ("Pr", "Praseodymium", 59, 140.9, "lanthanide"),
    ("Nd", "Neodymium", 60, 144.2, "lanthanide"),
    ("Pm", "Promethium", 61, 145.0, "lanthanide"),
    ("Sm", "Samarium", 62, 150.4, "lanthanide"),
    ("Eu", "Europium", 63, 152.0, "lanthanide"),
    ("Gd", "Gadolinium", 64, 157.3, "lanthanide"),
    ("Tb", "Terbium", 65, 158.9, "lanthanide"),
    ("Dy", "Dysprosium", 66, 162.5, "lanthanide"),
    ("Ho", "Holmium", 67, 164.9, "lanthanide"),
    ("Er", "Erbium", 68, 167.3, "lanthanide"),
    ("Tm", "Thulium", 69, 168.9, "lanthanide"),
    ("Yb", "Ytterbium", 70, 173.0, "lanthanide"),
    ("Lu", "Lutetium", 71, 175.0, "lanthanide"),
    ("Hf", "Hafnium", 72, 178.5, "transition-metal"),
    ("Ta", "Tantalum", 73, 180.9, "transition-metal"),
    ("W", "Tungsten", 74, 183.8, "transition-metal"),
    ("Re", "Rhenium", 75, 186.2, "transition-metal"),
    ("Os", "Osmium", 76, 190.2, "transition-metal"),
    ("Ir", "Iridium", 77, 192.2, "transition-metal"),
    ("Pt", "Platinum", 78, 195.1, "transition-metal"),
    ("Au", "Gold", 79, 197.0, "transition-metal"),
    ("Hg", "Mercury", 80, 200.6, "transition-metal"),
    ("Tl", "Thallium", 81, 204.4, "post-transition-metal"),
    ("Pb", "Lead", 82, 207.2, "post-transition-metal"),
    ("Bi", "Bismuth", 83, 209.0, "post-transition-metal"),
    ("Po", "Polonium", 84, 209.0, "metalloid"),
    ("At", "Astatine", 85, 210.0, "halogen"),
    ("Rn", "Radon", 86, 222.0, "noble-gas"),
    ("Fr", "Francium", 87, 223.0, "alkali-metal"),
    ("Ra", "Radium", 88, 226.0, "alkaline-earth-metal"),
    ("Ac", "Actinium", 89, 227.0, "actinide"),
    ("Th", "Thorium", 90, 232.0, "actinide"),
    ("Pa", "Protactinium", 91, 231.0, "actinide"),
    ("U", "Uranium", 92, 238.0, "actinide"),
    ("Np", "Neptunium", 93, 237.0, "actinide"),
    ("Pu", "Plutonium", 94, 244.0, "actinide"),
    ("Am", "Americium", 95, 243.0, "actinide"),
    ("Cm", "Curium", 96, 247.0, "actinide"),
    ("Bk", "Berkelium", 97, 247.0, "actinide"),
    ("Cf", "Californium", 98, 251.0, "actinide"),
    ("Es", "Einsteinium", 99, 252.0, "actinide"),
    ("Fm", "Fermium", 100, 257.0, "actinide"),
    ("Md", "Mendelevium", 101, 258.0, "actinide"),
    ("No", "Nobelium", 102, 259.0, "actinide"),
    ("Lr", "Lawrencium", 103, 262.0, "actinide"),
    ("Rf", "Rutherfordium", 104, 267.0, "transition-metal"),
    ("Db", "Dubnium", 105, 268.0, "transition-metal"),
    ("Sg", "Seaborgium", 106, 269.0, "transition-metal"),
    ("Bh", "Bohrium", 107, 270.0, "transition-metal"),
    ("Hs", "Hassium", 108, 277.0, "transition-metal"),
    ("Mt", "Meitnerium", 109, 278.0, "transition-metal"),
    ("Ds", "Darmstadtium", 110, 281.0, "transition-metal"),
    ("Rg", "Roentgenium", 111, 282.0, "transition-metal"),
    ("Cn", "Copernicium", 112, 285.0, "transition-metal"),
    ("Nh", "Nihonium", 113, 286.0, "post-transition-metal"),
    ("Fl", "Flerovium", 114, 289.0, "post-transition-metal"),
    ("Mc", "Moscovium", 115, 290.0, "post-transition-metal"),
    ("Lv", "Livermorium", 116, 293.0, "post-transition-metal"),
    ("Ts", "Tennessine", 117, 294.0, "halogen"),
    ("Og", "Oganesson", 118, 294.0, "noble-gas"),
    ("D", "Deuterium", 1, 2.014, "nonmetal"),
]

ELEMENTS: Dict[str, ElementData] = {
    row[0]: ElementData(*row) for row in _ELEMENT_ROWS
}

ELEMENT_SYMBOLS = frozenset(ELEMENTS)


def is_valid_element(symbol: str) -> bool:
    return symbol in ELEMENT_SYMBOLS


def get_element(symbol: str) -> Optional[ElementData]:
    return ELEMENTS.get(symbol)


def get_atomic_mass(symbol: str) -> Optional[float]:
    element = ELEMENTS.get(symbol)
    return element.atomic_mass if element else None
