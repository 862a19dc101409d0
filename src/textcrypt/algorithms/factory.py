import json
import os
from typing import Any, Dict, List, Optional, Union

from ..errors import InvalidFormatError
from .base import TextAlgorithm, TextFormat
from .cipher import ChaCha20Cipher
from .keyed_hash import Blake3KeyedHash
from .signature import Ed25519Signature

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), '..', 'config', 'formats.json')


class AlgorithmFactory:
    """Factory for creating text algorithm instances from a format selector."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize factory.

        Args:
            config_path: Path to a formats.json config file. Defaults to the
                         one shipped with the package.
        """
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        with open(config_path, 'r') as f:
            self.config = json.load(f)

    def create_algorithm(self, fmt: Union[str, TextFormat]) -> TextAlgorithm:
        """Create the algorithm instance for a format selector."""
        fmt = TextFormat.parse(fmt)
        variant = self._find_variant(fmt)

        if fmt is TextFormat.BLAKE3:
            return Blake3KeyedHash(name=variant['name'], description=variant.get('description', ''))

        elif fmt is TextFormat.ED25519:
            return Ed25519Signature(name=variant['name'], description=variant.get('description', ''))

        elif fmt is TextFormat.CHACHA20:
            return ChaCha20Cipher(name=variant['name'], description=variant.get('description', ''))

        else:
            raise InvalidFormatError(f"Unknown text format: {fmt}")

    def _find_variant(self, fmt: TextFormat) -> Dict[str, Any]:
        """Find variant configuration by format."""
        try:
            return self.config['formats'][fmt.value]
        except KeyError:
            raise InvalidFormatError(f"Format {fmt.value} is not configured") from None

    def get_key_files(self, fmt: Union[str, TextFormat]) -> List[str]:
        """File names for the keys generate_key returns, in the same order."""
        return list(self._find_variant(TextFormat.parse(fmt))['key_files'])

    def get_all_algorithms(self) -> List[Dict[str, Any]]:
        """Get list of all configured formats with metadata."""
        algorithms = []

        for format_name in self.config['formats']:
            algo = self.create_algorithm(format_name)
            info = algo.get_info()
            info['key_files'] = self.get_key_files(format_name)
            algorithms.append(info)

        return algorithms
