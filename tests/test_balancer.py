import json
import math
import unittest
from functools import reduce

from chembalancer.balancer import ChemicalBalancer, balance
from chembalancer.constants import CHARGE_KEY
from chembalancer.messages import MessageCatalog
from chembalancer.solver import SolverConfiguration


class TestBasicBalancing(unittest.TestCase):
    def assertBalances(self, equation, expected):
        result = balance(equation)
        self.assertEqual(result.status, "success", result.message)
        self.assertEqual(result.balanced_string, expected)

    def test_simple_equations(self):
        cases = {
            "H2 + O2 -> H2O": "2H2 + O2 -> 2H2O",
            "Fe + O2 -> Fe2O3": "4Fe + 3O2 -> 2Fe2O3",
            "CH4 + O2 -> CO2 + H2O": "CH4 + 2O2 -> CO2 + 2H2O",
            "KClO3 -> KCl + O2": "2KClO3 -> 2KCl + 3O2",
            "C8H18 + O2 -> CO2 + H2O": "2C8H18 + 25O2 -> 16CO2 + 18H2O",
            "K + MgBr -> KBr + Mg": "K + MgBr -> KBr + Mg",
        }
        for equation, expected in cases.items():
            with self.subTest(equation=equation):
                self.assertBalances(equation, expected)

    def test_coefficients_and_debug(self):
        result = balance("H2 + O2 -> H2O")
        self.assertTrue(result.ok)
        self.assertEqual(result.coefficients, {"H2": 2, "O2": 1, "H2O": 2})
        self.assertEqual(result.debug["elements"], ("H", "O"))
        self.assertEqual(result.debug["reactants"], {"H2": {"H": 2}, "O2": {"O": 2}})
        self.assertEqual(result.debug["products"], {"H2O": {"H": 2, "O": 1}})
        check = result.debug["balance_check"]
        self.assertEqual((check["H"].left, check["H"].right), (4, 4))
        self.assertEqual((check["O"].left, check["O"].right), (2, 2))

    def test_all_separators(self):
        for separator in ("->", "=>", "=", "→", "⇌"):
            with self.subTest(separator=separator):
                self.assertBalances(f"H2 + O2 {separator} H2O", "2H2 + O2 -> 2H2O")

    def test_extra_whitespace(self):
        self.assertBalances("  H2   +   O2    ->   H2O  ", "2H2 + O2 -> 2H2O")

    def test_already_balanced_input_is_unchanged(self):
        self.assertBalances("2H2 + O2 -> 2H2O", "2H2 + O2 -> 2H2O")

    def test_to_dict_is_json_serializable(self):
        payload = json.loads(json.dumps(balance("H2 + O2 -> H2O").to_dict()))
        self.assertEqual(payload["status"], "success")
        self.assertEqual(payload["debug"]["balance_check"]["H"], {"left": 4, "right": 4})


class TestRealWorldEquations(unittest.TestCase):
    def test_redox_and_acid_reactions(self):
        cases = {
            "Fe + HNO3 -> Fe(NO3)3 + N2 + H2O":
                "10Fe + 36HNO3 -> 10Fe(NO3)3 + 3N2 + 18H2O",
            "Mg + HNO3 -> Mg(NO3)2 + NH4NO3 + H2O":
                "4Mg + 10HNO3 -> 4Mg(NO3)2 + NH4NO3 + 3H2O",
            "Cl2 + NaOH -> NaCl + NaClO + H2O":
                "Cl2 + 2NaOH -> NaCl + NaClO + H2O",
            "FeCO3 + HNO3 -> Fe(NO3)3 + NO + CO2 + H2O":
                "3FeCO3 + 10HNO3 -> 3Fe(NO3)3 + NO + 3CO2 + 5H2O",
            "Al + H2SO4 -> Al2(SO4)3 + SO2 + H2O":
                "2Al + 6H2SO4 -> Al2(SO4)3 + 3SO2 + 6H2O",
        }
        for equation, expected in cases.items():
            with self.subTest(equation=equation):
                result = balance(equation)
                self.assertEqual(result.balanced_string, expected, result.message)

    def test_large_coordination_compound(self):
        expected = (
            "10[Cr(N2H4CO)6]4[Cr(CN)6]3 + 1176KMnO4 + 1399H2SO4 -> "
            "35K2Cr2O7 + 1176MnSO4 + 420CO2 + 660KNO3 + 223K2SO4 + 1879H2O"
        )
        result = balance(
            "[Cr(N2H4CO)6]4[Cr(CN)6]3 + KMnO4 + H2SO4 -> "
            "K2Cr2O7 + MnSO4 + CO2 + KNO3 + K2SO4 + H2O"
        )
        self.assertEqual(result.balanced_string, expected, result.message)

    def test_multi_dimensional_null_space(self):
        result = balance("K2S + KMnO4 + H2SO4 -> S + MnSO4 + K2SO4 + H2O")
        self.assertEqual(
            result.balanced_string,
            "2K2S + 2KMnO4 + 4H2SO4 -> S + 2MnSO4 + 3K2SO4 + 4H2O",
        )


class TestIonicEquations(unittest.TestCase):
    def test_half_reactions(self):
        cases = {
            "Fe^3+ + e- -> Fe^2+": "Fe^3+ + e- -> Fe^2+",
            "Cu -> Cu^2+ + e-": "Cu -> Cu^2+ + 2e-",
            "Na -> Na+ + e": "Na -> Na+ + e",
            "Na -> Na+ + e^-": "Na -> Na+ + e^-",
            "MnO4- + H+ + e- -> Mn^2+ + H2O": "MnO4- + 8H+ + 5e- -> Mn^2+ + 4H2O",
            "Cr2O7^2- + H+ + e- -> Cr^3+ + H2O": "Cr2O7^2- + 14H+ + 6e- -> 2Cr^3+ + 7H2O",
        }
        for equation, expected in cases.items():
            with self.subTest(equation=equation):
                result = balance(equation)
                self.assertEqual(result.balanced_string, expected, result.message)

    def test_ionic_equations(self):
        cases = {
            "Na+ + Cl- -> NaCl": "Na+ + Cl- -> NaCl",
            "H2O -> H+ + OH-": "H2O -> H+ + OH-",
            "Cl2 + OH- -> Cl- + ClO3- + H2O": "3Cl2 + 6OH- -> 5Cl- + ClO3- + 3H2O",
            "MnO4- + C2O4^2- + H+ -> Mn^2+ + CO2 + H2O":
                "2MnO4- + 5C2O4^2- + 16H+ -> 2Mn^2+ + 10CO2 + 8H2O",
        }
        for equation, expected in cases.items():
            with self.subTest(equation=equation):
                result = balance(equation)
                self.assertEqual(result.balanced_string, expected, result.message)

    def test_charge_appears_in_debug(self):
        result = balance("Fe^3+ + e- -> Fe^2+")
        self.assertEqual(result.debug["elements"], ("Fe", CHARGE_KEY))
        charge = result.debug["balance_check"][CHARGE_KEY]
        self.assertEqual((charge.left, charge.right), (2, 2))


class TestHydrates(unittest.TestCase):
    def test_hydrates(self):
        cases = {
            "CuSO4.5H2O -> CuSO4 + H2O": "CuSO4.5H2O -> CuSO4 + 5H2O",
            "MgSO4 + H2O -> MgSO4.7H2O": "MgSO4 + 7H2O -> MgSO4.7H2O",
            "FeSO4 + (NH4)2SO4 + H2O -> Fe(NH4)2(SO4)2.6H2O":
                "FeSO4 + (NH4)2SO4 + 6H2O -> Fe(NH4)2(SO4)2.6H2O",
        }
        for equation, expected in cases.items():
            with self.subTest(equation=equation):
                result = balance(equation)
                self.assertEqual(result.balanced_string, expected, result.message)


class TestCoefficientHints(unittest.TestCase):
    def test_consistent_hint_scales_solution(self):
        self.assertEqual(balance("8Fe + O2 -> Fe2O3").balanced_string, "8Fe + 6O2 -> 4Fe2O3")

    def test_inconsistent_hints_are_ignored(self):
        result = balance("100Fe + 100O2 -> 1Fe2O3")
        self.assertEqual(result.balanced_string, "4Fe + 3O2 -> 2Fe2O3")

    def test_hints_matching_minimal_solution(self):
        result = balance("6CO2 + 6H2O -> C6H12O6 + 6O2")
        self.assertEqual(result.balanced_string, "6CO2 + 6H2O -> C6H12O6 + 6O2")

    def test_hint_below_minimal_solution_is_ignored(self):
        self.assertEqual(balance("H2 + 1O2 -> H2O").balanced_string, "2H2 + O2 -> 2H2O")


class TestBalanceProperties(unittest.TestCase):
    EQUATIONS = [
        "H2 + O2 -> H2O",
        "Fe + HNO3 -> Fe(NO3)3 + N2 + H2O",
        "MnO4- + H+ + e- -> Mn^2+ + H2O",
        "CuSO4.5H2O -> CuSO4 + H2O",
        "K2S + KMnO4 + H2SO4 -> S + MnSO4 + K2SO4 + H2O",
        "C3H8 + O2 -> CO2 + H2O",
    ]

    def test_every_element_and_charge_is_conserved(self):
        for equation in self.EQUATIONS:
            with self.subTest(equation=equation):
                result = balance(equation)
                self.assertTrue(result.ok, result.message)
                for check in result.debug["balance_check"].values():
                    self.assertTrue(check.balanced)

    def test_coefficients_are_positive_and_minimal(self):
        for equation in self.EQUATIONS:
            with self.subTest(equation=equation):
                coefficients = list(balance(equation).coefficients.values())
                self.assertTrue(all(value > 0 for value in coefficients))
                self.assertEqual(reduce(math.gcd, coefficients), 1)

    def test_balancing_is_deterministic(self):
        for equation in self.EQUATIONS:
            with self.subTest(equation=equation):
                self.assertEqual(balance(equation), balance(equation))


class TestBalanceErrors(unittest.TestCase):
    def assertError(self, equation, fragment):
        result = balance(equation)
        self.assertEqual(result.status, "error")
        self.assertIn(fragment, result.message)
        self.assertEqual(result.coefficients, {})
        self.assertIsNone(result.balanced_string)

    def test_empty_equation(self):
        self.assertError("", "Empty equation")
        self.assertError("   ", "Empty equation")

    def test_separators(self):
        self.assertError("H2 + O2", "missing separator")
        self.assertError("H2 -> H2 -> H2", "multiple separators")
        self.assertError("H2 + O2 -> H2O = H2O", "multiple separators")

    def test_missing_side(self):
        self.assertError(" -> H2O", "Missing reactants or products")
        self.assertError("H2 ->", "Missing reactants or products")
        self.assertError("->", "Missing reactants or products")

    def test_element_conservation_precheck(self):
        self.assertError(
            "H2 -> O2", "Element 'H' is present in reactants but missing in products"
        )
        self.assertError(
            "H2 -> H2O", "Element 'O' is present in products but missing in reactants"
        )

    def test_parse_errors_are_reported(self):
        self.assertError("H2 + Xx -> H2O", "Unknown element 'Xx'")
        self.assertError("h2 + O2 -> H2O", "Invalid characters")

    def test_no_positive_solution(self):
        self.assertError(
            "H2O -> H2O2",
            "Failed to balance equation: No solution with positive coefficients exists "
            "for 'H2O -> H2O2'",
        )

    def test_deeply_nested_groups(self):
        self.assertError("(" * 3000 + "H" + ")" * 3000 + " -> H2", "nested more than 32 levels")

    def test_oversized_subscript_and_multiplier(self):
        self.assertError("H" + "9" * 5000 + " -> H2", "more than 9 digits")
        self.assertError("(H)" + "9" * 5000 + " -> H2", "more than 9 digits")
        self.assertError("Fe^" + "9" * 5000 + "+ + e- -> Fe", "more than 9 digits")

    def test_oversized_coefficient_hint(self):
        self.assertError("9" * 5000 + "H2 + O2 -> H2O", "more than 9 digits")

    def test_error_dict_only_has_status_and_message(self):
        self.assertEqual(
            balance("").to_dict(), {"status": "error", "message": "Empty equation"}
        )


class TestResultIsReadOnly(unittest.TestCase):
    def setUp(self):
        self.result = balance("H2 + O2 -> H2O")

    def test_coefficients_cannot_be_changed(self):
        with self.assertRaises(TypeError):
            self.result.coefficients["H2"] = 5
        self.assertEqual(self.result.coefficients["H2"], 2)

    def test_debug_cannot_be_changed(self):
        with self.assertRaises(TypeError):
            self.result.debug["elements"] = ["X"]
        with self.assertRaises(TypeError):
            self.result.debug["reactants"]["H2"]["H"] = 7
        with self.assertRaises(TypeError):
            del self.result.debug["balance_check"]["H"]

    def test_to_dict_returns_independent_copy(self):
        payload = self.result.to_dict()
        payload["coefficients"]["H2"] = 5
        payload["debug"]["reactants"]["H2"]["H"] = 7
        self.assertEqual(self.result.coefficients["H2"], 2)
        self.assertEqual(self.result.debug["reactants"]["H2"]["H"], 2)

    def test_error_result_has_empty_read_only_coefficients(self):
        result = balance("")
        self.assertEqual(result.coefficients, {})
        with self.assertRaises(TypeError):
            result.coefficients["H2"] = 1


class TestChemicalBalancer(unittest.TestCase):
    def test_vietnamese_messages(self):
        balancer = ChemicalBalancer(messages=MessageCatalog("vi"))
        self.assertEqual(balancer.balance("").message, "Phương trình rỗng")
        self.assertIn(
            "Nguyên tố 'H' có trong chất phản ứng", balancer.balance("H2 -> O2").message
        )

    def test_missing_translation_falls_back_to_english(self):
        balancer = ChemicalBalancer(messages=MessageCatalog("vi"))
        message = balancer.balance("H2O -> H2O2").message
        self.assertTrue(message.startswith("Không thể cân bằng phương trình: No solution"))

    def test_custom_solver_configuration(self):
        balancer = ChemicalBalancer(solver_config=SolverConfiguration(max_weight=2))
        result = balancer.balance("H2 + O2 -> H2O")
        self.assertEqual(result.balanced_string, "2H2 + O2 -> 2H2O")

    def test_balancers_with_different_locales_coexist(self):
        english = ChemicalBalancer()
        vietnamese = ChemicalBalancer(messages=MessageCatalog("vi"))
        self.assertEqual(vietnamese.balance("").message, "Phương trình rỗng")
        self.assertEqual(english.balance("").message, "Empty equation")


if __name__ == '__main__':
    unittest.main()
