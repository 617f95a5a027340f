"""
passaudit.compliance

Per-standard password rules layered over the engine's profile. Each check
either tests the PasswordProfile (length, character classes, deny-list) or is
an organisational control with no password test. Organisational controls are
reported as "manual" and credited with their weight.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from .evaluator import PasswordProfile, PasswordStrengthEngine, default_engine

Predicate = Callable[[PasswordProfile], bool]


@dataclass(frozen=True)
class Check:
    id: str
    requirement: str
    description: str
    weight: int
    test: Optional[Predicate] = None


@dataclass(frozen=True)
class Standard:
    key: str
    name: str
    description: str
    checks: List[Check]


def _min_length(n: int) -> Predicate:
    return lambda p: p.length >= n


def _not_common(p: PasswordProfile) -> bool:
    return not p.is_common_password


def _letters_and_digits(p: PasswordProfile) -> bool:
    return (p.has_uppercase or p.has_lowercase) and p.has_digit


def _all_classes(p: PasswordProfile) -> bool:
    return p.has_uppercase and p.has_lowercase and p.has_digit and p.has_symbol


STANDARDS: Dict[str, Standard] = {
    "nist": Standard("nist", "NIST 800-63B",
                     "National Institute of Standards and Technology Digital Identity Guidelines", [
        Check("nist-1", "Minimum 12 Characters", "Password must be at least 12 characters long", 20, _min_length(12)),
        Check("nist-2", "All ASCII Characters Allowed", "Support all printable ASCII characters including spaces", 10),
        Check("nist-3", "No Composition Rules Required", "Should not enforce specific character type requirements", 15),
        Check("nist-4", "Breach Database Check", "Compare against known compromised password databases", 25, _not_common),
        Check("nist-5", "No Periodic Changes", "Only require password change if compromise suspected", 15),
        Check("nist-6", "Password Strength Meter", "Provide real-time password strength feedback", 15),
    ]),
    "pci": Standard("pci", "PCI DSS 3.2.1", "Payment Card Industry Data Security Standard", [
        Check("pci-1", "Minimum 7 Characters", "Passwords must be at least 7 characters (8+ recommended)", 15, _min_length(7)),
        Check("pci-2", "Numeric and Alphabetic", "Password must contain both letters and numbers", 20, _letters_and_digits),
        Check("pci-3", "90-Day Expiration", "Passwords must be changed at least every 90 days", 15),
        Check("pci-4", "Password History", "Cannot reuse any of the last 4 passwords", 15),
        Check("pci-5", "Lockout After 6 Attempts", "Account locks after 6 failed login attempts", 20),
        Check("pci-6", "Unique User IDs", "Each user must have a unique ID that cannot be shared", 15),
    ]),
    "iso": Standard("iso", "ISO/IEC 27001", "Information Security Management System Standard", [
        Check("iso-1", "Password Complexity", "Minimum length and complexity requirements enforced", 20,
              lambda p: p.length >= 8 and p.has_uppercase and p.has_digit),
        Check("iso-2", "Password Protection", "Passwords stored in encrypted or hashed form", 25),
        Check("iso-3", "Password Management System", "Formal system for password generation, distribution, and storage", 20),
        Check("iso-4", "User Responsibilities", "Users required to maintain password confidentiality", 15),
        Check("iso-5", "Temporary Passwords", "Force change of temporary/initial passwords at first use", 10),
        Check("iso-6", "Access Control", "Password-based access controls for systems and applications", 10),
    ]),
    "hipaa": Standard("hipaa", "HIPAA Security Rule", "Health Insurance Portability and Accountability Act", [
        Check("hipaa-1", "Unique User Identification", "Assign unique identifier for tracking user identity", 20),
        Check("hipaa-2", "Emergency Access Procedure", "Establish procedures for emergency access to ePHI", 15),
        Check("hipaa-3", "Automatic Logoff", "Implement automatic logoff from inactive sessions", 15),
        Check("hipaa-4", "Encryption and Decryption", "Implement mechanisms to encrypt and decrypt ePHI", 25),
        Check("hipaa-5", "Password Complexity", "Strong passwords with complexity requirements", 15,
              lambda p: p.length >= 8 and _all_classes(p)),
        Check("hipaa-6", "Transmission Security", "Guard against unauthorized access during transmission", 10),
    ]),
    "soc2": Standard("soc2", "SOC 2 Type II", "Service Organization Control 2 Trust Services Criteria", [
        Check("soc2-1", "Strong Authentication", "Multi-factor authentication for privileged users", 25),
        Check("soc2-2", "Password Requirements", "Minimum complexity and length standards enforced", 20,
              lambda p: p.length >= 10 and p.has_uppercase and p.has_digit),
        Check("soc2-3", "Access Restrictions", "Logical access to systems restricted to authorized users", 15),
        Check("soc2-4", "Password Security Policies", "Documented policies for password creation and management", 15),
        Check("soc2-5", "Monitoring and Review", "Regular review of user access and password compliance", 15),
        Check("soc2-6", "Security Awareness Training", "Regular security training including password best practices", 10),
    ]),
}


def run_check(check: Check, profile: PasswordProfile) -> Dict:
    if check.test is None:
        status = "manual"
        passed = True
    else:
        passed = bool(check.test(profile))
        status = "pass" if passed else "fail"
    return {
        "id": check.id,
        "requirement": check.requirement,
        "description": check.description,
        "status": status,
        "score": check.weight if passed else 0,
    }


def check_compliance(
    password: str,
    standards: Optional[Iterable[str]] = None,
    engine: Optional[PasswordStrengthEngine] = None,
) -> Dict:
    """
    Evaluate `password` against the selected standards (all by default).
    Raises ValueError for an unknown standard key.
    """
    keys = list(standards) if standards else list(STANDARDS)
    unknown = [k for k in keys if k not in STANDARDS]
    if unknown:
        raise ValueError(f"Unknown standard(s): {', '.join(unknown)}; choose from {', '.join(STANDARDS)}")

    engine = engine or default_engine()
    profile = engine.classify(password)

    results: Dict[str, Dict] = {}
    for key in keys:
        std = STANDARDS[key]
        checks = [run_check(c, profile) for c in std.checks]
        results[key] = {
            "name": std.name,
            "description": std.description,
            "score": sum(c["score"] for c in checks),
            "checks": checks,
        }

    overall = sum(r["score"] for r in results.values()) / len(results)
    return {"standards": results, "overall_score": round(overall)}


def failed_requirements(report: Dict) -> List[str]:
    """Flatten a check_compliance() report into 'Standard: requirement' strings for failed checks."""
    out: List[str] = []
    for std in report["standards"].values():
        for c in std["checks"]:
            if c["status"] == "fail":
                out.append(f"{std['name']}: {c['requirement']}")
    return out
