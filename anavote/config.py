from typing import Optional

from pydantic import BaseModel, Field, model_validator

# Paramètres de l'élection de démonstration
NUM_VOTERS = 5
NUM_CANDIDATES = 4

# Taille du domaine du message caché (L) et bornes d'échantillonnage (S, T)
DOMAIN_SIZE = 4096

# Intervalle [low, high) de l'aléa de masquage r_i
BLINDING_LOW = 500
BLINDING_HIGH = 1000

# Message de couverture : ce que voit quiconque ne possède que la clé ElGamal
COVER_MESSAGE = 7

# Nombre de tentatives de la boucle de rejet, en multiples de T
ATTEMPTS_FACTOR = 100

## MODP Group 5 (1536 bits) -- RFC 3526, avec q = p - 1 et g = 5
RFC3526_P = int(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD1"
    "29024E088A67CC74020BBEA63B139B22514A08798E3404DD"
    "EF9519B3CD3A431B302B0A6DF25F14374FE1356D6D51C245"
    "E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE65381"
    "FFFFFFFFFFFFFFFF", 16)
RFC3526_Q = RFC3526_P - 1
RFC3526_G = 5

## parameters from MODP Group 24 -- Extracted from RFC 5114
RFC5114_P = 0x87A8E61DB4B6663CFFBBD19C651959998CEEF608660DD0F25D2CEED4435E3B00E00DF8F1D61957D4FAF7DF4561B2AA3016C3D91134096FAA3BF4296D830E9A7C209E0C6497517ABD5A8A9D306BCF67ED91F9E6725B4758C022E0B1EF4275BF7B6C5BFC11D45F9088B941F54EB1E59BB8BC39A0BF12307F5C4FDB70C581B23F76B63ACAE1CAA6B7902D52526735488A0EF13C6D9A51BFA4AB3AD8347796524D8EF6A167B5A41825D967E144E5140564251CCACB83E6B486F6B3CA3F7971506026C0B857F689962856DED4010ABD0BE621C3A3960A54E710C375F26375D7014103A4B54330C198AF126116D2276E11715F693877FAD7EF09CADB094AE91E1A1597

RFC5114_Q = 0x8CF83642A709A097B447997640129DA299B1A47D1EB3750BA308B0FE64F5FBD3

RFC5114_G = 0x3FB32C9B73134D0B2E77506660EDBD484CA7B18F21EF205407F4793A1A0BA12510DBC15077BE463FFF4FED4AAC0BB555BE3A6C1B0C6B47B1BC3773BF7E8C6F62901228F8C28CBB18A55AE31341000A650196F931C77A57F2DDF463E5E9EC144B777DE62AAAB8A8628AC376D282D6ED3864E67982428EBC831D14348F6F2F9193B5045AF2767164E1DFC967C1FB3F2E55A4BD1BFFE83B9C80D052B985D182EA0ADB2A3B7313D3FE14C8484B1E052588B9B7D2BBD2DF016199ECD06E1557CD0915B3353BBB64E0EC377FD028370DF92B52C7891428CDC67EB6184B523D1DB246C32F63078490F00EF8D647D148D47954515E2327CFEF98C582664B4C0F6CC41659


class ElectionConfig(BaseModel):
    """Paramètres d'une élection"""
    num_voters: int = Field(NUM_VOTERS, ge=1)
    num_candidates: int = Field(NUM_CANDIDATES, ge=1)
    domain_size: int = Field(DOMAIN_SIZE, ge=2, le=1 << 64)
    sampling_s: Optional[int] = Field(None, ge=1, le=1 << 64)
    sampling_t: Optional[int] = Field(None, ge=1, le=1 << 64)
    blinding_low: int = Field(BLINDING_LOW, ge=0)
    blinding_high: int = Field(BLINDING_HIGH, ge=1)
    cover_message: int = Field(COVER_MESSAGE, ge=0)
    base: Optional[int] = Field(None, ge=2)
    max_attempts: Optional[int] = Field(None, ge=1)

    @model_validator(mode="after")
    def check_bounds(self) -> "ElectionConfig":
        if self.blinding_low >= self.blinding_high:
            raise ValueError("L'intervalle de masquage [low, high) est vide")
        return self

    @property
    def vote_base(self) -> int:
        """Base d'encodage des votes : par défaut nombre de votants + 1"""
        return self.base if self.base is not None else self.num_voters + 1

    @property
    def s(self) -> int:
        return self.sampling_s if self.sampling_s is not None else self.domain_size

    @property
    def t(self) -> int:
        return self.sampling_t if self.sampling_t is not None else self.domain_size
