class StreamReceiver:
    """ An abstract base class that allows to receive data from a stream. """
    def __init__(self):
        pass

    def receive(self, data):
        pass

class Stream:
    """ A stream delivers every piece of data sent to it to all of its subscribers, in the order they subscribed. """
    def __init__(self):
        self._subscribers: list[StreamReceiver] = []

    def num_subscribers(self) -> int:
        return len(self._subscribers)

    def subscribe(self, subscriber: StreamReceiver):
        if subscriber not in self._subscribers:
            self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: StreamReceiver):
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)

    def send(self, data):
        for subscriber in list(self._subscribers):
            subscriber.receive(data)

class StreamCollector(StreamReceiver):
    """ A stream receiver that simply keeps everything it receives. """
    def __init__(self):
        super().__init__()
        self._received = []

    def receive(self, data):
        self._received.append(data)

    def received(self) -> list:
        return self._received

    def last(self):
        return self._received[-1] if self._received else None

    def clear(self):
        self._received.clear()
