"""
Utils that can be useful for debugging.
"""

import logging

logger = logging.getLogger(__name__)


class SigmaProtocol:
    """
    Sigma-protocol runner.

    Runs the three moves (commitment, challenge, response) of an interactive proof between a
    prover and a verifier in the same process.

    Args:
        verifier: Verifier object
        prover: Prover object
    """

    def __init__(self, verifier, prover):
        self.verifier = verifier
        self.prover = prover

    def verify(self, verbose=True):
        """Run the verification process."""

        # Funky names.
        victor = self.verifier
        peggy = self.prover

        commitment = peggy.commit()
        challenge = victor.send_challenge(commitment)
        response = peggy.compute_response(challenge)
        result = victor.verify(response)

        if verbose:
            if result:
                logger.info("Verified for %s", victor.__class__.__name__)
            else:
                logger.info(
                    "Not verified for %s: %s", victor.__class__.__name__, result.reason
                )

        return result
