"""Pytest configuration for the bibextract project.

This file ensures that the project root is on ``sys.path`` so that tests can
import the package without installing it, and provides small sample inputs
shared across test modules.
"""

from __future__ import annotations

import sys
import pathlib

# add workspace root to path for test imports
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent))

import pytest


SAMPLE_BBL = r"""\begin{thebibliography}{10}

\bibitem{gamma_design_1995}
Design patterns: elements of reusable object-oriented software.

\bibitem{knuth1984}
The TeXbook.

\end{thebibliography}
"""

SAMPLE_BIB = """% exported from the reference manager
@book{knuth1984,
  title={The {\\TeX}book},
  author={Knuth, Donald E.},
  year={1984},
}

@book{gamma_design_1995,
  title={Design Patterns},
  author={Gamma, Erich and Helm, Richard},
  year={1995},
}

@article{unused2001,
  title={Never cited},
  year={2001},
}
"""


@pytest.fixture
def project(tmp_path, monkeypatch):
    """A build directory holding one .bbl and one .bib file."""
    (tmp_path / "paper.bbl").write_text(SAMPLE_BBL)
    (tmp_path / "refs.bib").write_text(SAMPLE_BIB)
    monkeypatch.chdir(tmp_path)
    return tmp_path
