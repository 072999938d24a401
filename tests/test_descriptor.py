"""Tests for DescriptorBuilder."""
from announce.discovery.descriptor import DescriptorBuilder


class TestDescriptorBuilder:

    def test_http_and_telnet_without_https(self, make_config, identity):
        config = make_config(http_port=8080, https_port=0, telnet_port=4242)
        descriptor = DescriptorBuilder(config, identity).build()

        props = descriptor.services[0].properties
        assert set(props) == {"http", "telnet"}
        assert props["http"] == "http://10.0.0.5:8080"
        assert props["telnet"] == "10.0.0.5:4242"

    def test_all_ports_enabled(self, make_config, identity):
        config = make_config(http_port=80, https_port=443, telnet_port=23)
        props = DescriptorBuilder(config, identity).build().services[0].properties

        assert props == {
            "http": "http://10.0.0.5:80",
            "https": "https://10.0.0.5:443",
            "telnet": "10.0.0.5:23",
        }

    def test_negative_and_zero_ports_are_omitted(self, make_config, identity):
        config = make_config(http_port=-1, https_port=0, telnet_port=-4242)
        props = DescriptorBuilder(config, identity).build().services[0].properties
        assert props == {}

    def test_external_host_only_with_http(self, make_config, identity):
        with_http = make_config(external_host="node1.example.com", http_port=8080)
        props = DescriptorBuilder(with_http, identity).build().services[0].properties
        assert props["http-external"] == "http://node1.example.com:8080"

        without_http = make_config(external_host="node1.example.com", http_port=0)
        props = DescriptorBuilder(without_http, identity).build().services[0].properties
        assert "http-external" not in props

    def test_wire_format(self, make_config, identity):
        descriptor = DescriptorBuilder(make_config(environment="prod", pool="edge"), identity).build()

        assert descriptor.to_wire() == {
            "environment": "prod",
            "pool": "edge",
            "location": "/node-0001",
            "services": [
                {
                    "id": "ann-0001",
                    "type": "reporting",
                    "properties": {
                        "http": "http://10.0.0.5:8080",
                        "telnet": "10.0.0.5:4242",
                    },
                }
            ],
        }

    def test_builds_a_fresh_descriptor_each_time(self, make_config, identity):
        builder = DescriptorBuilder(make_config(), identity)
        first, second = builder.build(), builder.build()
        assert first is not second
        assert first == second
