"""Reference declarations from the final EIP-6093 draft.

Only errors inside the grammar are listed (``Invalid*`` and
``Insufficient*``). Errors such as ``ERC721NonexistentToken`` or
``ERC1155MissingApprovalForAll`` use other prefixes and are left out.
"""

from __future__ import annotations

from erclint.domain.declarations import ErrorDeclaration
from erclint.domain.signature import parse_signature
from erclint.domain.vocabulary import Vocabulary

REFERENCE_SIGNATURES: dict[str, tuple[str, ...]] = {
    "ERC20": (
        "ERC20InsufficientBalance(address sender, uint256 balance, uint256 needed)",
        "ERC20InvalidSender(address sender)",
        "ERC20InvalidReceiver(address receiver)",
        "ERC20InsufficientAllowance(address spender, uint256 allowance, uint256 needed)",
        "ERC20InvalidApprover(address approver)",
        "ERC20InvalidSpender(address spender)",
    ),
    "ERC721": (
        "ERC721InvalidOwner(address owner)",
        "ERC721InvalidSender(address sender)",
        "ERC721InvalidReceiver(address receiver)",
        "ERC721InsufficientApproval(address operator, uint256 tokenId)",
        "ERC721InvalidApprover(address approver)",
        "ERC721InvalidOperator(address operator)",
    ),
    "ERC1155": (
        "ERC1155InsufficientBalance(address sender, uint256 balance, uint256 needed, "
        "uint256 tokenId)",
        "ERC1155InvalidSender(address sender)",
        "ERC1155InvalidReceiver(address receiver)",
        "ERC1155InvalidApprover(address approver)",
        "ERC1155InvalidOperator(address operator)",
    ),
}


def reference_declarations(domain: str | None = None) -> list[ErrorDeclaration]:
    """Parse the reference catalog, optionally restricted to one domain."""
    vocabulary = Vocabulary()
    declarations: list[ErrorDeclaration] = []
    for catalog_domain, signatures in REFERENCE_SIGNATURES.items():
        if domain is not None and catalog_domain != domain:
            continue
        declarations.extend(
            parse_signature(sig, vocabulary, origin=f"EIP-6093:{catalog_domain}")
            for sig in signatures
        )
    return declarations
