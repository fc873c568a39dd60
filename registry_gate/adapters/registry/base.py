from abc import ABC, abstractmethod
from dataclasses import dataclass

from registry_gate.schemas.document import Document


@dataclass(frozen=True)
class SubmissionResult:
	"""Outcome of an accepted submission.

	Attributes:
		status_code: HTTP status returned by the registry.
		body: Raw response body (the registry's document id on success).
	"""

	status_code: int
	body: str


class AbstractDocumentSubmitter(ABC):
	"""Interface for clients that deliver documents to the registry.

	Implementations do not enforce rate limits; callers are expected to pass
	through an admission gate first.
	"""

	@abstractmethod
	def submit(self, document: Document, signature: str) -> SubmissionResult:
		"""Serialize and send a document to the registry.

		Args:
			document: Document to put into circulation.
			signature: Detached signature of the document, sent as-is.

		Returns:
			SubmissionResult: Status and body of the accepted request.

		Raises:
			SubmissionFailedError: If the registry rejected the document or
				could not be reached.
		"""
		...
