"""outhash: content-true hashes for finalized build outputs.

Build tools name chunks with a hash computed before the last content
transforms (minification, concatenation) ran. outhash recomputes the hash
from the final bytes, renames each chunk to embed it, rewrites the old
names inside index chunks, and can verify the emitted files afterwards:

  - Ordinary chunks are rehashed first, index chunks last
  - Index chunks are hashed on their rewritten content
  - Optional after-emit validation of every shipped file name
"""

__version__ = "0.1.0"
__description__ = "Rehash finalized build artifacts and propagate renames into index artifacts"

from outhash.core.compilation import Compilation, Compiler
from outhash.core.plugin import OutputHashPlugin
from outhash.cli.app import app as cli

__all__ = ["Compilation", "Compiler", "OutputHashPlugin", "cli", "__version__"]
