"""Command-line interface for restobook - interactive client for the REST API."""

import asyncio
import getpass
import logging
import shlex
import sys

from restobook.api import Backend
from restobook.auth import AuthStore, LoginForm
from restobook.booking import BookingFlow, MyReservations, OwnerInbox, PendingSelectionStore
from restobook.browse import BrowseView
from restobook.config import get_config, setup_logging
from restobook.exceptions import RestobookError
from restobook.models import ReservationStatus, UserRole
from restobook.navigation import (
    LOGIN_PATH,
    MY_RESERVATIONS_PATH,
    RecordingNavigator,
    redirect_target,
)
from restobook.session import FileTokenStorage, Session

logger = logging.getLogger(__name__)

HELP = """Commands:
  login <username>                         Sign in (password is prompted)
  logout                                   Sign out
  list [type] [search text]                Browse restaurants (type: all, restaurant, cafe, choyxona, fastfood)
  book <slug> <YYYY-MM-DD> <guests>        Show free slots and book one
  my                                       My reservations
  cancel <id>                              Cancel one of my reservations
  inbox [YYYY-MM-DD]                       Owner: reservations of my restaurant
  status <id> <status>                     Owner: confirm / complete / no_show / cancel
  quit                                     Exit"""


def sent_to_login(navigator: RecordingNavigator, mark: int) -> bool:
    """Whether the navigator went to the login screen after history entry ``mark``."""
    return any(path.startswith(LOGIN_PATH) for path in navigator.history[mark:])


class ConsoleNavigator(RecordingNavigator):
    """Prints navigation events instead of switching screens."""

    def push(self, path: str) -> None:
        super().push(path)
        print(f"→ {path}")


class RestobookCLI:
    """Command-line interface for restobook."""

    def __init__(self) -> None:
        """Initialize the CLI."""
        self.config = get_config()
        setup_logging(self.config)

        self.navigator = ConsoleNavigator()
        self.session = Session(FileTokenStorage(self.config.token_file))
        self.backend = Backend(
            self.config, self.session, on_auth_expired=self._on_auth_expired
        )
        self.auth = AuthStore(self.backend, self.navigator)
        self.pending = PendingSelectionStore(
            self.config.pending_selection_db, self.config.pending_selection_ttl_minutes
        )
        self.browse = BrowseView(
            self.backend.restaurants, self.navigator, self.config.search_debounce
        )
        self.my_reservations = MyReservations(self.backend.reservations)
        self.inbox = OwnerInbox(self.backend.owner)

        logger.info(f"restobook CLI initialized against {self.config.api_url}")

    async def run(self) -> None:
        """Run the CLI application."""
        print("\n" + "=" * 60)
        print("RESTOBOOK - Restaurant discovery and table reservations")
        print(f"API: {self.config.api_url}")
        print("=" * 60 + "\n")
        print(HELP)

        self.pending.cleanup_expired()
        if await self.auth.check_auth():
            print(f"\nSigned in as {self.auth.user.full_name or self.auth.user.username}")

        try:
            while True:
                try:
                    line = (await asyncio.to_thread(input, "\nrestobook> ")).strip()
                except EOFError:
                    break

                if not line:
                    continue
                if line.lower() in ["quit", "exit", "q"]:
                    print("\nGoodbye!")
                    break

                try:
                    await self._dispatch(shlex.split(line))
                except RestobookError as e:
                    logger.error(f"Request failed: {e}")
                    print(f"\n⚠ {e}")
                except ValueError as e:
                    print(f"\n⚠ {e}")
        finally:
            await self.backend.aclose()

    async def _dispatch(self, args: list[str]) -> None:
        command, rest = args[0].lower(), args[1:]
        handlers = {
            "help": self._help,
            "login": self._login,
            "logout": self._logout,
            "list": self._list,
            "book": self._book,
            "my": self._my,
            "cancel": self._cancel,
            "inbox": self._inbox,
            "status": self._status,
        }
        handler = handlers.get(command)
        if handler is None:
            print(f"Unknown command: {command}. Type 'help'.")
            return
        await handler(rest)

    async def _help(self, _args: list[str]) -> None:
        print(HELP)

    async def _login(self, args: list[str], redirect: str | None = None) -> bool:
        username = args[0] if args else await asyncio.to_thread(input, "Username: ")
        password = await asyncio.to_thread(getpass.getpass, "Password: ")

        form = LoginForm(self.auth, redirect or "/")
        if not await form.submit(username, password):
            print(f"\n⚠ {form.error}")
            return False
        print(f"✓ Welcome, {self.auth.user.full_name or username}")
        return True

    async def _logout(self, _args: list[str]) -> None:
        await self.auth.logout()
        print("✓ Signed out")

    async def _list(self, args: list[str]) -> None:
        restaurant_type = ""
        if args and args[0] in ("all", "restaurant", "cafe", "choyxona", "fastfood"):
            restaurant_type = "" if args[0] == "all" else args[0]
            args = args[1:]

        self.browse.set_search(" ".join(args))
        await self.browse.set_type(restaurant_type)

        print(f"\n{len(self.browse.restaurants)} places found")
        for restaurant in self.browse.restaurants:
            status = "open" if restaurant.is_open else "closed"
            print(f"  {restaurant.slug:<24} {restaurant.name} ({restaurant.type}, {status})")

    async def _book(self, args: list[str]) -> None:
        if len(args) < 3:
            raise ValueError("Usage: book <slug> <YYYY-MM-DD> <guests>")
        slug, date, guests = args[0], args[1], int(args[2])

        restaurant = await self.backend.restaurants.get(slug)
        flow = BookingFlow(
            restaurant,
            self.backend.reservations,
            self.auth,
            self.navigator,
            self.config,
            pending=self.pending,
        )
        await flow.set_guest_count(guests)
        await flow.set_date(date)
        if not self._show_slots(flow):
            return

        choice = (await asyncio.to_thread(input, "Place id and time (e.g. 3 18:00:00): ")).split()
        if len(choice) != 2 or not flow.select_slot(int(choice[0]), choice[1]):
            print("⚠ That slot is not available")
            return
        flow.notes = (await asyncio.to_thread(input, "Notes (optional): ")).strip()

        mark = len(self.navigator.history)
        reservation = await flow.submit()
        if reservation is None and sent_to_login(self.navigator, mark):
            print("Please sign in to finish the booking.")
            if not await self._login([], redirect_target(self.navigator.current)):
                return
            if not await flow.resume():
                print("⚠ Your slot is no longer available")
                self._show_slots(flow)
                return
            reservation = await flow.submit()

        if reservation is None:
            if flow.error:
                print(f"\n⚠ {flow.error}")
            return
        print(f"\n✓ Reservation #{reservation.id} created ({reservation.status.value})")

    def _show_slots(self, flow: BookingFlow) -> bool:
        if flow.error:
            print(f"\n⚠ {flow.error}")
            return False
        if not flow.availability.places:
            print("\nNo suitable place found for this day")
            return False

        for place in flow.availability.places:
            free = [slot.time[:5] for slot in place.slots if slot.available]
            print(f"  [{place.id}] {place.name} ({place.capacity} guests): {' '.join(free) or '-'}")
        return True

    async def _my(self, _args: list[str]) -> None:
        if not self.auth.require(MY_RESERVATIONS_PATH):
            return
        await self.my_reservations.load()
        if self.my_reservations.error:
            print(f"\n⚠ {self.my_reservations.error}")
            return
        if not self.my_reservations.reservations:
            print("\nYou have no reservations yet")
            return
        for reservation in self.my_reservations.reservations:
            marker = " (cancellable)" if MyReservations.can_cancel(reservation) else ""
            print(
                f"  #{reservation.id} {reservation.restaurant_name or reservation.restaurant}"
                f" {reservation.date} {reservation.time_from[:5]}"
                f" x{reservation.guest_count} [{reservation.status.value}]{marker}"
            )

    async def _cancel(self, args: list[str]) -> None:
        if not args:
            raise ValueError("Usage: cancel <id>")
        if not self.auth.require(MY_RESERVATIONS_PATH):
            return
        if not self.my_reservations.reservations:
            await self.my_reservations.load()

        reservation_id = int(args[0])
        reservation = self.my_reservations.get(reservation_id)
        if reservation is None or not MyReservations.can_cancel(reservation):
            print("⚠ This reservation cannot be canceled")
            return

        async def confirm(_reservation) -> bool:
            answer = await asyncio.to_thread(input, "Cancel this reservation? [y/N] ")
            return answer.strip().lower() in ("y", "yes")

        if await self.my_reservations.cancel(reservation_id, confirm):
            print(f"✓ Reservation #{reservation_id} canceled")
        elif self.my_reservations.error:
            print(f"\n⚠ {self.my_reservations.error}")

    async def _inbox(self, args: list[str]) -> None:
        if not self.auth.require("/owner/reservations", UserRole.OWNER, UserRole.ADMIN):
            return
        self.inbox.date_filter = args[0] if args else ""
        await self.inbox.load()
        if self.inbox.error:
            print(f"\n⚠ {self.inbox.error}")
            return
        for reservation in self.inbox.reservations:
            actions = ", ".join(status.value for status in OwnerInbox.actions(reservation))
            print(
                f"  #{reservation.id} {reservation.user_name or '-'} {reservation.date}"
                f" {reservation.time_from[:5]} x{reservation.guest_count}"
                f" [{reservation.status.value}] {actions}"
            )

    async def _status(self, args: list[str]) -> None:
        if len(args) != 2:
            raise ValueError("Usage: status <id> <status>")
        if not self.auth.require("/owner/reservations", UserRole.OWNER, UserRole.ADMIN):
            return
        value = "canceled" if args[1] == "cancel" else args[1]
        if not self.inbox.reservations:
            await self.inbox.load()
        if await self.inbox.change_status(int(args[0]), ReservationStatus(value)):
            print(f"✓ Reservation #{args[0]} is now {value}")
        else:
            print(f"⚠ {self.inbox.error or 'That status change is not allowed'}")

    def _on_auth_expired(self) -> None:
        print("\n⚠ Your session has expired, please sign in again.")
        self.auth.expire()


def main() -> None:
    """Main entry point for the CLI."""
    try:
        # Validate configuration by attempting to load it
        get_config()
    except Exception as e:
        print(f"Configuration error: {e}")
        print("\nCheck the RESTOBOOK_* environment variables or your .env file.")
        sys.exit(1)

    cli = RestobookCLI()
    try:
        asyncio.run(cli.run())
    except KeyboardInterrupt:
        print("\n\nExiting restobook. Goodbye!")


if __name__ == "__main__":
    main()
