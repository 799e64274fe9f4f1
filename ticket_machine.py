#
# Ticket machine controller.
# A transit ticket machine: pick a ticket, pay for it, take it.
# Cancel is allowed while a ticket is selected and not yet dispensed.
#
# Oct 17, 2026 - initial version
#

from enum import Enum

# Testing flag
TESTING = True

CURRENCY = "KZT"


def log(s):
    """Print debugging messages when TESTING=True."""
    if TESTING:
        print(s)


#   ERRORS
class TicketMachineError(Exception):
    """Base class for every rejected operation."""
    MESSAGE = "operation not allowed"

    def __init__(self, state=None, message=None):
        super().__init__(message or self.MESSAGE)
        self.state = state


class ProductUnavailable(TicketMachineError):
    MESSAGE = "ticket unavailable"

class AlreadySelected(TicketMachineError):
    MESSAGE = "ticket already selected"

class NoSelection(TicketMachineError):
    MESSAGE = "please select a ticket first"

class AlreadyDispensed(TicketMachineError):
    MESSAGE = "ticket already dispensed"

class TransactionCanceled(TicketMachineError):
    MESSAGE = "transaction canceled"

class NoActiveTransaction(TicketMachineError):
    MESSAGE = "no active transaction"

class TransactionComplete(TicketMachineError):
    MESSAGE = "transaction complete"

class AlreadyCanceled(TicketMachineError):
    MESSAGE = "already canceled"

class InsufficientFunds(TicketMachineError):
    MESSAGE = "insufficient funds"

class NoPaidProduct(TicketMachineError):
    MESSAGE = "no paid ticket"

class NoProductToDispense(TicketMachineError):
    MESSAGE = "no ticket"


#   STATES AND OPERATIONS
class TicketState(Enum):
    IDLE = "Idle"
    WAITING_FOR_PAYMENT = "WaitingForPayment"
    PAYMENT_RECEIVED = "PaymentReceived"
    DISPENSED = "Dispensed"
    CANCELED = "Canceled"

    @property
    def terminal(self):
        return self in (TicketState.DISPENSED, TicketState.CANCELED)


class Operation(Enum):
    SELECT = "select"
    INSERT = "insert"
    CANCEL = "cancel"
    DISPENSE = "dispense"


# Every (state, operation) pair not listed here is a real transition.
REJECTIONS = {
    (TicketState.IDLE, Operation.INSERT): NoSelection,
    (TicketState.IDLE, Operation.CANCEL): NoActiveTransaction,
    (TicketState.IDLE, Operation.DISPENSE): NoPaidProduct,

    (TicketState.WAITING_FOR_PAYMENT, Operation.SELECT): AlreadySelected,
    (TicketState.WAITING_FOR_PAYMENT, Operation.DISPENSE): InsufficientFunds,

    (TicketState.PAYMENT_RECEIVED, Operation.SELECT): AlreadySelected,

    (TicketState.DISPENSED, Operation.SELECT): AlreadySelected,
    (TicketState.DISPENSED, Operation.INSERT): AlreadyDispensed,
    (TicketState.DISPENSED, Operation.CANCEL): TransactionComplete,
    (TicketState.DISPENSED, Operation.DISPENSE): AlreadyDispensed,

    (TicketState.CANCELED, Operation.SELECT): AlreadySelected,
    (TicketState.CANCELED, Operation.INSERT): TransactionCanceled,
    (TicketState.CANCELED, Operation.CANCEL): AlreadyCanceled,
    (TicketState.CANCELED, Operation.DISPENSE): NoProductToDispense,
}

# Wording for rejections that read differently once a transaction is over.
REJECTION_MESSAGES = {
    (TicketState.DISPENSED, Operation.SELECT): "please take your ticket and start over",
    (TicketState.DISPENSED, Operation.INSERT): "please take your ticket",
    (TicketState.CANCELED, Operation.SELECT): "transaction canceled. Please start over",
}


def apply(state, operation, machine, argument=None):
    """
    Run one operation against the machine data for the given state.

    Returns (new_state, result). result is an error instance when the
    operation is rejected (the state and the machine are left untouched),
    otherwise the notice text for the caller to show.
    """
    error = REJECTIONS.get((state, operation))
    if error is not None:
        return state, error(state, REJECTION_MESSAGES.get((state, operation)))

    if operation is Operation.SELECT:
        # state is IDLE here
        product = argument
        if not machine.has_ticket(product):
            return state, ProductUnavailable(state)
        machine.selected_product = product
        machine.price = machine.prices.get(product, 0)
        return (TicketState.WAITING_FOR_PAYMENT,
                f"Ticket selected: {product} ({machine.price:.2f} {CURRENCY})")

    if operation is Operation.INSERT:
        amount = argument
        machine.inserted_amount += amount
        if state is TicketState.PAYMENT_RECEIVED:
            return state, f"Additional funds inserted: {amount:.2f} {CURRENCY}"
        notice = (f"Inserted: {amount:.2f} {CURRENCY} "
                  f"(Total: {machine.inserted_amount:.2f})")
        if machine.inserted_amount >= machine.price:
            return (TicketState.PAYMENT_RECEIVED,
                    notice + "\nSufficient funds. Ready to dispense ticket.")
        return state, notice

    if operation is Operation.CANCEL:
        # inserted money is not refunded
        return TicketState.CANCELED, "Transaction canceled."

    if operation is Operation.DISPENSE:
        # state is PAYMENT_RECEIVED here
        machine.inventory[machine.selected_product] -= 1
        machine.inserted_amount = 0
        machine.selected_product = None
        return TicketState.DISPENSED, "Ticket dispensed!"

    raise ValueError(f"Unknown operation: {operation!r}")


#   TICKET MACHINE CLASS
class TicketMachine(object):
    """Ticket machine controller. Holds one transaction plus stock and prices."""

    INVENTORY = {"metro": 10, "bus": 15, "train": 5}
    PRICES = {"metro": 300, "bus": 250, "train": 1000}

    def __init__(self, inventory=None, prices=None):
        self.state = TicketState.IDLE
        self.selected_product = None
        self.price = 0
        self.inserted_amount = 0	# Total money inserted this transaction
        self.inventory = dict(self.INVENTORY if inventory is None else inventory)
        self.prices = dict(self.PRICES if prices is None else prices)
        self.window = None	# GUI window, console output when None

    def go_to_state(self, state):
        if state is self.state:
            return
        log(f"Exiting {self.state.value}")
        self.state = state
        log(f"Entering {self.state.value}")

    def display(self, message):
        """Show a notice in the GUI output, or on the console."""
        if self.window is not None:
            self.window["-OUTPUT-"].update(message + "\n", append=True)
        else:
            print(message)

    def _run(self, operation, argument=None):
        new_state, result = apply(self.state, operation, self, argument)
        if isinstance(result, TicketMachineError):
            raise result
        self.go_to_state(new_state)
        self.display(result)
        return result

    def select_product(self, product_id):
        return self._run(Operation.SELECT, product_id)

    def insert_money(self, amount):
        return self._run(Operation.INSERT, amount)

    def cancel(self):
        self._run(Operation.CANCEL)

    def dispense_product(self):
        return self._run(Operation.DISPENSE)

    def current_state_name(self):
        return self.state.value

    def has_ticket(self, product_id):
        return self.inventory.get(product_id, 0) > 0


#   CONSOLE DEMO
def _attempt(action, *args):
    try:
        action(*args)
    except TicketMachineError as e:
        print(f"Error: {e}")


def run_demo():
    """Run the three canned transactions, each on a fresh machine."""
    print("--- Successful Purchase ---")
    machine = TicketMachine()
    _attempt(machine.select_product, "metro")
    _attempt(machine.insert_money, 300)
    _attempt(machine.dispense_product)

    print("\n--- Cancellation Before Payment ---")
    machine = TicketMachine()
    _attempt(machine.select_product, "bus")
    _attempt(machine.cancel)
    print(f"State: {machine.current_state_name()}")

    print("\n--- Cancellation After Payment ---")
    machine = TicketMachine()
    _attempt(machine.select_product, "train")
    _attempt(machine.insert_money, 1000)
    _attempt(machine.cancel)
    print(f"State: {machine.current_state_name()}")


if __name__ == "__main__":
    TESTING = False
    run_demo()
