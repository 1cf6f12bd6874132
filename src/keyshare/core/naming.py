"""Filename derivation rules for generated artifacts."""

from __future__ import annotations

OUTPUT_SUFFIX: str = ".asc"
SIGNATURE_SUFFIX: str = ".sig.asc"


def derive_filenames(key_id: str, outfile: str | None = None) -> tuple[str, str]:
    """Return ``(outfile, sigfile)`` for *key_id*.

    Without an override the output is ``<key>.asc`` and the signature
    ``<key>.sig.asc``.  With an override the signature is the override
    plus ``.sig.asc``.

    >>> derive_filenames("ABCD1234")
    ('ABCD1234.asc', 'ABCD1234.sig.asc')
    >>> derive_filenames("ABCD1234", "foo.asc")
    ('foo.asc', 'foo.asc.sig.asc')
    """
    if outfile:
        return outfile, f"{outfile}{SIGNATURE_SUFFIX}"
    return f"{key_id}{OUTPUT_SUFFIX}", f"{key_id}{SIGNATURE_SUFFIX}"
