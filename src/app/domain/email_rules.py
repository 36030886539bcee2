"""Regras de correção de e-mail: funções puras, sem I/O.

Heurística determinística aplicada antes de qualquer consulta a store:
limpeza, correção de domínios digitados errado, remoção de alias do Gmail
e normalização de TLDs australianos sem ponto.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Domínios digitados errado -> domínio canônico
DOMAIN_TYPOS: dict[str, str] = {
    "gmial.com": "gmail.com",
    "gmal.com": "gmail.com",
    "gmail.cm": "gmail.com",
    "gmail.co": "gmail.com",
    "gamil.com": "gmail.com",
    "hotmial.com": "hotmail.com",
    "hotmail.cm": "hotmail.com",
    "yahoo.cm": "yahoo.com",
    "yaho.com": "yahoo.com",
    "outlook.cm": "outlook.com",
    "outlok.com": "outlook.com",
}

# A ordem importa: ".au" precisa vir por último (é sufixo de todos os outros)
AUSTRALIAN_TLDS: tuple[str, ...] = (
    ".com.au",
    ".net.au",
    ".org.au",
    ".edu.au",
    ".gov.au",
    ".asn.au",
    ".id.au",
    ".au",
)

# Provedores aceitos pela heurística de domínio (sem API externa)
COMMON_VALID_DOMAINS: frozenset[str] = frozenset(
    {
        "gmail.com",
        "outlook.com",
        "hotmail.com",
        "yahoo.com",
        "icloud.com",
        "aol.com",
    }
)

GMAIL_DOMAIN = "gmail.com"

_EMAIL_FORMAT = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class CorrectionOptions:
    """Regras opcionais de correção."""

    remove_gmail_aliases: bool = True
    check_australian_tlds: bool = True


@dataclass(frozen=True)
class CorrectionResult:
    """Resultado de correct_email."""

    corrected: bool
    email: str


def is_valid_format(email: str) -> bool:
    """Formato mínimo: `x@y.z`, um único "@" e nenhum espaço."""
    return _EMAIL_FORMAT.fullmatch(email) is not None


def split_email(email: str) -> tuple[str, str]:
    """Separa local e domínio no primeiro "@" (domínio vazio se ausente)."""
    local, _, domain = email.partition("@")
    return local, domain


def correct_email(
    email: str,
    options: CorrectionOptions | None = None,
) -> CorrectionResult:
    """Aplica as regras de correção em ordem fixa.

    1. trim + minúsculas + remoção de espaços internos
    2. domínio digitado errado (DOMAIN_TYPOS)
    3. alias "+tag" do Gmail (se habilitado)
    4. TLD australiano sem ponto (se habilitado), primeira ocorrência vence

    Args:
        email: Endereço como recebido.
        options: Regras opcionais; default liga todas.

    Returns:
        CorrectionResult com o endereço final e se alguma regra disparou.
    """
    if not email:
        return CorrectionResult(corrected=False, email=email)

    opts = options or CorrectionOptions()

    cleaned = _WHITESPACE.sub("", email.strip().lower())
    corrected = cleaned != email

    local, domain = split_email(cleaned)

    fixed_domain = DOMAIN_TYPOS.get(domain)
    if fixed_domain:
        domain = fixed_domain
        corrected = True

    if opts.remove_gmail_aliases and domain == GMAIL_DOMAIN and "+" in local:
        local = local.split("+", 1)[0]
        corrected = True

    if opts.check_australian_tlds and domain:
        au_domain = _fix_australian_tld(domain)
        if au_domain != domain:
            domain = au_domain
            corrected = True

    rebuilt = f"{local}@{domain}" if "@" in cleaned else cleaned
    return CorrectionResult(corrected=corrected, email=rebuilt)


def _fix_australian_tld(domain: str) -> str:
    for tld in AUSTRALIAN_TLDS:
        bare = tld.replace(".", "")
        if domain.endswith(bare) and not domain.endswith(tld):
            # "bigpond.comau" vira "bigpond.com.au", sem ponto duplicado
            head = domain[: len(domain) - len(bare)].rstrip(".")
            return f"{head}{tld}"
    return domain


def get_domain(email: str) -> str:
    return split_email(email)[1]


def is_common_domain(email: str) -> bool:
    """Heurística grosseira: domínio pertence a um provedor conhecido."""
    return get_domain(email) in COMMON_VALID_DOMAINS
