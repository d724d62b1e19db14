import pytest
from web3 import Web3
from web3.exceptions import Web3Exception

from factories import VALID_PROOF, build_command
from zkemail_ens.codec import encode_proof
from zkemail_ens.config import VerifierSettings
from zkemail_ens.errors import ClaimValidationError, VerifierError
from zkemail_ens.signals import build_public_signals, public_signal_bytes
from zkemail_ens.verifier import Groth16ContractVerifier, build_verifier

CONTRACT = "0x000000000000000000000000000000000000c0de"


class _FakeCall:
    def __init__(self, contract, args):
        self._contract = contract
        self._args = args

    def call(self):
        self._contract.calls.append(self._args)
        if self._contract.error is not None:
            raise self._contract.error
        return self._contract.answer


class _FakeFunctions:
    def __init__(self, contract):
        self._contract = contract

    def verifyProof(self, *args):  # noqa: N802 - mirrors the Solidity name
        return _FakeCall(self._contract, args)


class FakeVerifierContract:
    def __init__(self, answer=True, error=None):
        self.answer = answer
        self.error = error
        self.calls = []
        self.functions = _FakeFunctions(self)


def _inputs():
    command = build_command()
    return encode_proof(VALID_PROOF), public_signal_bytes(command), build_public_signals(command)


def test_passes_solidity_shaped_arguments():
    contract = FakeVerifierContract(answer=True)
    proof_bytes, signal_bytes, signals = _inputs()
    assert Groth16ContractVerifier(contract).verify(proof_bytes, signal_bytes) is True
    (p_a, p_b, p_c, public), = contract.calls
    assert p_a == [11, 12]
    assert p_b == [[21, 22], [23, 24]]
    assert p_c == [31, 32]
    assert public == signals


def test_propagates_negative_answer():
    proof_bytes, signal_bytes, _ = _inputs()
    assert Groth16ContractVerifier(FakeVerifierContract(answer=False)).verify(proof_bytes, signal_bytes) is False


@pytest.mark.parametrize("error", [Web3Exception("execution reverted"), OSError("connection refused")])
def test_call_failures_raise_verifier_error(error):
    proof_bytes, signal_bytes, _ = _inputs()
    with pytest.raises(VerifierError):
        Groth16ContractVerifier(FakeVerifierContract(error=error)).verify(proof_bytes, signal_bytes)


def test_malformed_inputs_never_reach_contract():
    contract = FakeVerifierContract()
    proof_bytes, signal_bytes, _ = _inputs()
    with pytest.raises(VerifierError):
        Groth16ContractVerifier(contract).verify(proof_bytes[:64], signal_bytes)
    with pytest.raises(VerifierError):
        Groth16ContractVerifier(contract).verify(proof_bytes, signal_bytes[:-1])
    assert contract.calls == []


def test_build_verifier_binds_checksummed_contract():
    w3 = Web3(Web3.HTTPProvider("http://127.0.0.1:8545"))
    settings = VerifierSettings(provider_url="http://127.0.0.1:8545", contract_address=CONTRACT)
    verifier = build_verifier(settings, web3=w3)
    assert isinstance(verifier, Groth16ContractVerifier)
    assert verifier._contract.address == Web3.to_checksum_address(CONTRACT)


def test_build_verifier_requires_contract_address():
    with pytest.raises(ClaimValidationError):
        build_verifier(VerifierSettings(provider_url="http://127.0.0.1:8545"))


def test_build_verifier_requires_provider():
    with pytest.raises(ClaimValidationError):
        build_verifier(VerifierSettings(contract_address=CONTRACT))
