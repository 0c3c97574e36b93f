"""Plain data records produced and consumed by the gateway."""

import json
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """Account mail address and password; the password never shows in repr()."""

    mail_address: str
    password: str = field(repr=False)

    def __post_init__(self) -> None:
        if self.mail_address is None:
            raise TypeError("mail_address must not be None")
        if self.password is None:
            raise TypeError("password must not be None")


@dataclass
class Group:
    """One group membership as listed on the groups overview page."""

    url: str
    name: str
    notifications: int = 0


@dataclass(frozen=True)
class PostHandle:
    """
    A post element found on the profile page.

    ``data_ft`` is the raw feed-tracking attribute and ``html`` the outer
    markup of the element.  Nothing else in the package looks inside.
    """

    data_ft: str
    html: str = field(repr=False)

    @property
    def tracking(self) -> dict:
        """The feed-tracking attribute decoded as JSON ({} if it is not JSON)."""
        try:
            data = json.loads(self.data_ft)
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
