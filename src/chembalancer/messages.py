"""Message catalogue used for errors and calculation steps.

The catalogue is passed to the parser, the balancer and the calculators
instead of being read from a process-wide locale setting, so two balancers
with different locales can be used side by side.
"""

from __future__ import annotations

import re
from typing import Mapping, Protocol

TRANSLATIONS: Mapping[str, Mapping[str, str]] = {
    "en": {
        "error.empty_equation": "Empty equation",
        "error.missing_separator": "Invalid equation syntax: missing separator (->, =>, =)",
        "error.multiple_separators": "Invalid equation syntax: multiple separators found",
        "error.missing_reactants_or_products": "Missing reactants or products",
        "error.element_missing_in_products": "Element '{element}' is present in reactants but missing in products",
        "error.element_missing_in_reactants": "Element '{element}' is present in products but missing in reactants",
        "error.invalid_formula_syntax": "Invalid formula syntax (unbalanced or malformed parentheses): {formula}",
        "error.invalid_characters": "Invalid characters in formula '{formula}': '{chars}'",
        "error.invalid_characters_end": "Invalid characters at end of formula '{formula}': '{chars}'",
        "error.number_too_long": "Number in '{formula}' has more than {limit} digits",
        "error.nesting_too_deep": "Groups in formula '{formula}' are nested more than {limit} levels deep",
        "error.unknown_element": "Unknown element '{element}' in formula '{formula}'",
        "error.unknown_element_molar_mass": "Unknown element '{element}' - cannot calculate molar mass",
        "error.balance_failed": "Failed to balance equation: {message}",
        "error.no_solution": "No solution with positive coefficients exists for '{equation}'",
        "error.molecule_not_found": "Molecule '{molecule}' not found in equation",
        "error.invalid_unit": "Unsupported unit '{unit}' (expected 'mol' or 'g')",
        "error.invalid_amount": "Amount of '{molecule}' must be positive, got {amount}",
        "error.no_reagents": "At least one reagent amount is required",
        "step.balanced_equation": "Balanced equation: {equation}",
        "step.coefficients": "Coefficients: {given}={given_coeff}, {find}={find_coeff}",
        "step.given_mol": "Given: {amount} mol {molecule}",
        "step.convert_to_mol": "Convert {amount}g {molecule} to moles: {amount} / {molar_mass} = {result} mol",
        "step.mole_ratio": "Mole ratio: {given_mol} mol × ({find_coeff}/{given_coeff}) = {result} mol {find}",
        "step.convert_to_grams": "Convert to grams: {mol} mol × {molar_mass} g/mol = {result} g",
        "step.limiting_explanation": "{limiting} is limiting because it supports only {reactions} complete reactions.",
    },
    "vi": {
        "error.empty_equation": "Phương trình rỗng",
        "error.missing_separator": "Cú pháp phương trình không hợp lệ: thiếu dấu phân cách (->, =>, =)",
        "error.multiple_separators": "Cú pháp phương trình không hợp lệ: có nhiều dấu phân cách",
        "error.missing_reactants_or_products": "Thiếu chất phản ứng hoặc sản phẩm",
        "error.element_missing_in_products": "Nguyên tố '{element}' có trong chất phản ứng nhưng thiếu trong sản phẩm",
        "error.element_missing_in_reactants": "Nguyên tố '{element}' có trong sản phẩm nhưng thiếu trong chất phản ứng",
        "error.invalid_formula_syntax": "Cú pháp công thức không hợp lệ (ngoặc không cân bằng hoặc sai định dạng): {formula}",
        "error.invalid_characters": "Ký tự không hợp lệ trong công thức '{formula}': '{chars}'",
        "error.invalid_characters_end": "Ký tự không hợp lệ ở cuối công thức '{formula}': '{chars}'",
        "error.number_too_long": "Số trong '{formula}' có nhiều hơn {limit} chữ số",
        "error.nesting_too_deep": "Các nhóm trong công thức '{formula}' lồng nhau quá {limit} cấp",
        "error.unknown_element": "Nguyên tố không xác định '{element}' trong công thức '{formula}'",
        "error.unknown_element_molar_mass": "Nguyên tố không xác định '{element}' - không thể tính khối lượng mol",
        "error.balance_failed": "Không thể cân bằng phương trình: {message}",
        "error.molecule_not_found": "Không tìm thấy phân tử '{molecule}' trong phương trình",
        "step.balanced_equation": "Phương trình cân bằng: {equation}",
        "step.coefficients": "Hệ số: {given}={given_coeff}, {find}={find_coeff}",
        "step.given_mol": "Cho: {amount} mol {molecule}",
        "step.convert_to_mol": "Chuyển đổi {amount}g {molecule} sang mol: {amount} / {molar_mass} = {result} mol",
        "step.mole_ratio": "Tỉ lệ mol: {given_mol} mol × ({find_coeff}/{given_coeff}) = {result} mol {find}",
        "step.convert_to_grams": "Chuyển đổi sang gam: {mol} mol × {molar_mass} g/mol = {result} g",
        "step.limiting_explanation": "{limiting} là chất giới hạn vì chỉ đủ cho {reactions} phản ứng hoàn toàn.",
    },
}

SUPPORTED_LOCALES = tuple(TRANSLATIONS)

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


class MessageFormatter(Protocol):
    def format(self, key: str, **params: object) -> str:
        """Render the message ``key`` with ``params`` substituted."""
        ...


class MessageCatalog:
    """Looks messages up in one locale, falling back to English, then the key."""

    def __init__(self, locale: str = "en") -> None:
        if locale not in TRANSLATIONS:
            raise ValueError(
                f"Unsupported locale: {locale} (expected one of {', '.join(SUPPORTED_LOCALES)})"
            )
        self.locale = locale

    def format(self, key: str, **params: object) -> str:
        template = TRANSLATIONS[self.locale].get(key) or TRANSLATIONS["en"].get(key) or key

        def substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name in params:
                return str(params[name])
            return match.group(0)

        return _PLACEHOLDER.sub(substitute, template)


DEFAULT_MESSAGES = MessageCatalog()
