#
# Front panel for the ticket machine, for use on the Pi500.
# Runs GUI only when gpiozero is missing.
#
# Oct 17, 2026 - initial version
#

# PySimpleGUI recipes used:
#
# Persistent GUI example
# https://pysimplegui.readthedocs.io/en/latest/cookbook/#recipe-pattern-2a-persistent-window-multiple-reads-using-an-event-loop

import FreeSimpleGUI as sg
from time import sleep

from ticket_machine import TicketMachine, TicketMachineError, CURRENCY, log

# Hardware interface module
# Checks if on Raspberry Pi, if not program runs in GUI only mode
try:
    from gpiozero import Button, Servo
    hardware_present = True
except ModuleNotFoundError:
    hardware_present = False
    print("Not on a Raspberry Pi or gpiozero not installed.")

SERVO_PIN = 17
CANCEL_PIN = 5

# Money buttons, in KZT
MONEY = (50, 100, 200, 500, 1000)


class FrontPanel(object):
    """Ties the GUI window and the hardware to the current transaction."""

    def __init__(self, window, servo=None):
        self.window = window
        self.servo = servo
        self.machine = None
        self.new_transaction()

    def new_transaction(self):
        """Start over on a fresh machine that keeps the remaining stock."""
        if self.machine is None:
            self.machine = TicketMachine()
        else:
            self.machine = TicketMachine(self.machine.inventory, self.machine.prices)
        self.machine.window = self.window
        log("New transaction")

    def dispense_servo(self):
        """Move servo 3 times to push the ticket out."""
        if self.servo:
            for _ in range(3):
                self.servo.mid(); sleep(0.3)
                self.servo.max(); sleep(0.3)
                self.servo.min(); sleep(0.3)

    def handle(self, event):
        """Route one GUI event to the machine."""
        machine = self.machine
        try:
            if event == "NEW":
                self.new_transaction()
            elif event == "CANCEL":
                machine.cancel()
            elif event == "DISPENSE":
                machine.dispense_product()
                self.dispense_servo()
            elif event in machine.prices:
                machine.select_product(event)
            elif event.startswith("money-"):
                machine.insert_money(int(event.split("-", 1)[1]))
        except TicketMachineError as e:
            machine.display(f"Error: {e}")
        self.window["-STATE-"].update(self.machine.current_state_name())

    def button_action(self):
        """Hardware GPIO CANCEL button callback, runs on the gpiozero thread."""
        # only the event loop may touch the machine and the window elements
        self.window.write_event_value("CANCEL", None)


def build_window():
    sg.theme("BluePurple")

    money_col = [[sg.Text("INSERT MONEY", font=("Helvetica", 24))]]
    for value in MONEY:
        money_col.append([sg.Button(f"{value} {CURRENCY}", key=f"money-{value}",
                                    font=("Helvetica", 18))])

    ticket_col = [[sg.Text("SELECT TICKET", font=("Helvetica", 24))]]
    for key, price in TicketMachine.PRICES.items():
        ticket_col.append([
            sg.Button(key, font=("Helvetica", 18), size=(10, 1)),
            sg.Text(f"{price:.2f} {CURRENCY}", font=("Helvetica", 18), pad=((20, 0), (5, 5)))
        ])

    layout = [
        [sg.Column(money_col), sg.VSeparator(), sg.Column(ticket_col)],
        [sg.Button("DISPENSE", font=("Helvetica", 14)),
         sg.Button("CANCEL", font=("Helvetica", 14)),
         sg.Button("NEW", font=("Helvetica", 14)),
         sg.Text("Idle", key="-STATE-", size=(20, 1), font=("Helvetica", 14))],
        [sg.Multiline(key="-OUTPUT-", autoscroll=True, size=(60, 10), disabled=True)]
    ]
    return sg.Window("Ticket Machine", layout)


def main():
    window = build_window()
    panel = FrontPanel(window, Servo(SERVO_PIN) if hardware_present else None)

    # Hardware button on GPIO5
    if hardware_present:
        try:
            key1 = Button(CANCEL_PIN, pull_up=True)
            key1.when_pressed = panel.button_action
            print("GPIO CANCEL button enabled.")
        except Exception as e:
            print(f"GPIO failed to initialize: {e}")

    # Main event loop
    while True:
        event, values = window.read(timeout=10)
        if event in (sg.WIN_CLOSED, "Exit"):	# Closes window and ends program
            break
        if event == sg.TIMEOUT_EVENT:
            continue
        panel.handle(event)

    window.close()
    print("Normal exit")


if __name__ == "__main__":
    main()
