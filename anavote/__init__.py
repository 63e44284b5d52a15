"""Chiffrement ElGamal anamorphique appliqué au vote à bulletin secret"""

__version__ = "0.1.0"
