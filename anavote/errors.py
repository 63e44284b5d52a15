class AnavoteError(Exception):
    """Exception de base du système de vote anamorphique"""
    pass


class RandomnessUnavailable(AnavoteError):
    """La source d'entropie a échoué : l'opération est abandonnée, jamais relancée"""
    pass


class NoModularInverse(AnavoteError, ArithmeticError):
    """L'opérande n'est pas premier avec le module"""

    def __init__(self, value: int, modulus: int):
        super().__init__(f"Pas d'inverse modulaire pour {value} modulo {modulus}")
        self.value = value
        self.modulus = modulus


class AnamorphicEncodingExhausted(AnavoteError):
    """La boucle de rejet a dépassé le nombre maximal de tentatives"""

    def __init__(self, attempts: int):
        super().__init__(f"Aucun échantillon accepté après {attempts} tentatives")
        self.attempts = attempts


class AnamorphicDecodeNotFound(AnavoteError, LookupError):
    """Le chiffré ne contient aucun message caché lisible avec cette clé"""
    pass
