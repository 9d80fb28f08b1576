# blegatt

Building blocks for a Bluetooth Low Energy GATT peripheral (server),
working purely on bytes:

- `blegatt.model`: services, characteristics and descriptors, with
  static values or read, write and notify handlers; `Property` flags,
  `ResponseWriter`, `Notifier`, `Request` and `ReadRequest`.
- `blegatt.attr`: `generate_attributes(services, base)` lays services out
  as an ATT attribute table (`AttrRange`) and assigns their handles.
- `blegatt.server`: `Central` answers ATT requests from one connected
  central: MTU exchange, find information, find by type value, read by
  type, read, read blob, read by group, write, write command and client
  characteristic configuration writes that start or stop notifications.
- `blegatt.adv`: `AdvPacket` builds advertising or scan response
  payloads; `Advertisement.unmarshal` decodes received advertising data.
- `blegatt.l2cap`: `L2capWriter`, an MTU-bounded writer for response PDUs.
- `blegatt.att`: ATT opcodes (`Opcode`), error codes (`AttEcode`),
  `AttError` and `att_error_rsp`.
- `blegatt.uuids`: the `UUID` type, `uuid16`, `parse_uuid`, well-known
  GATT UUIDs and name lookups (`service_name`, `characteristic_name`,
  `descriptor_name`, `attribute_name`).
- `blegatt.device`: the `State` enum of adapter power states.
- `blegatt.services`: sample services `new_gap_service(name)`,
  `new_gatt_service()`, `new_battery_service()` and `new_count_service()`.

## Install

```
pip install .
```

## Defining a service

```python
from blegatt.model import Service
from blegatt.uuids import parse_uuid, uuid16

svc = Service(parse_uuid("09fc95c0-c111-11e3-9904-0002a5d5c51b"))

svc.add_characteristic(uuid16(0x2A19)).set_value(b"\x64")

def on_read(rsp, req):
    rsp.write(b"count: 1")          # at most req.cap bytes fit

svc.add_characteristic(parse_uuid("11fac9e0-c111-11e3-9246-0002a5d5c51b")).handle_read(on_read)
```

A characteristic has either a static value or a read handler; setting
both raises `RuntimeError`. Adding a second characteristic (or
descriptor) with the same UUID raises `ValueError`. `handle_notify`
adds a client characteristic configuration descriptor; when a central
enables notifications, the notify handler is started in its own thread
with a `Notifier`, whose `done()` turns true once the central disables
them.

## Serving requests

```python
from blegatt.attr import generate_attributes
from blegatt.server import Central

attrs = generate_attributes([svc], 1)           # handles start at 1
addr = bytes.fromhex("00005e005301")            # made-up address
central = Central(attrs, addr, conn)
central.loop()                                  # reads requests, writes responses
```

`conn` is any object with `read(size)`, `write(data)` and `close()`.
`loop()` runs until `read` returns no data or raises `OSError`, then
closes the connection. A single request can also be answered directly
with `central.handle_request(data)`, which returns the response bytes,
or `None` for a write command. `central.id()` gives the address as
colon-separated hex; `central.mtu()` the negotiated MTU (23 to 256).
Unsupported requests are answered with a "request not supported" ATT
error.

## Advertising

```python
from blegatt.adv import AdFlag, AdvPacket

pkt = AdvPacket()
pkt.append_flags(AdFlag.GENERAL_DISCOVERABLE | AdFlag.LE_ONLY)
all_fit = pkt.append_uuid_fit([svc.uuid])   # GAP/GATT UUIDs are skipped
pkt.append_name("Gopher")                   # shortened if it does not fit
payload = pkt.to_bytes()                    # always 31 bytes, zero padded
used = len(pkt)
```

## What this package does not do

It opens no Bluetooth adapter and talks to no radio: there is no HCI
access, no way to start advertising, scan, or connect, and no client
(central-side) GATT procedures. It has no command-line program. Feed
`Central` the byte stream of an L2CAP ATT channel obtained by other
means, and hand `AdvPacket.to_bytes()` to whatever sets advertising data.

## Tests

```
pip install .[test]
pytest
```