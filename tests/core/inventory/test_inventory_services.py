"""
tests/core/inventory/test_inventory_services.py - 리소스별 수집 함수 테스트

MagicMock paginator로 API 응답을 흉내 냅니다.
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import EndpointConnectionError

from core.exceptions import APICallError
from core.inventory.services import (
    collect_instances,
    collect_internet_gateways,
    collect_nat_gateways,
    collect_network_interfaces,
    collect_security_groups,
    collect_stack_resources,
    collect_stacks,
    collect_subnets,
    collect_tag_descriptions,
    collect_vpc_peerings,
    collect_vpcs,
    collect_vpn_connections,
    collect_vpn_gateways,
)
from core.inventory.services.helpers import call, filter_kwargs, paginate

VPC_FILTER = [{"Name": "vpc-id", "Values": ["vpc-1"]}]


class TestHelpers:
    """paginate / call / filter_kwargs 테스트"""

    def test_paginate_all_pages(self, paginated_client):
        """모든 페이지 항목을 순서대로 반환"""
        client = paginated_client(
            {"describe_subnets": [{"Subnets": [{"SubnetId": "a"}]}, {"Subnets": [{"SubnetId": "b"}]}, {}]}
        )

        items = list(paginate(client, "describe_subnets", "Subnets", Filters=VPC_FILTER))

        assert [i["SubnetId"] for i in items] == ["a", "b"]
        client.get_paginator.assert_called_with("describe_subnets")
        client.get_paginator("describe_subnets").paginate.assert_called_once_with(Filters=VPC_FILTER)

    def test_paginate_wraps_client_error(self, client_error):
        client = MagicMock()
        client.get_paginator.return_value.paginate.side_effect = client_error("UnauthorizedOperation")

        with pytest.raises(APICallError) as exc_info:
            list(paginate(client, "describe_subnets", "Subnets"))

        assert exc_info.value.service == "ec2"
        assert exc_info.value.operation == "describe_subnets"
        assert exc_info.value.error_code == "UnauthorizedOperation"

    def test_paginate_wraps_botocore_error(self):
        """연결 실패 등 BotoCoreError도 변환"""
        client = MagicMock()
        client.get_paginator.return_value.paginate.side_effect = EndpointConnectionError(endpoint_url="https://x")

        with pytest.raises(APICallError) as exc_info:
            list(paginate(client, "describe_stacks", "Stacks", service="cloudformation"))

        assert exc_info.value.service == "cloudformation"
        assert exc_info.value.error_code == "EndpointConnectionError"

    def test_call(self):
        client = MagicMock()
        client.describe_vpn_gateways.return_value = {"VpnGateways": [{"VpnGatewayId": "vgw-1"}]}

        assert call(client, "describe_vpn_gateways", "VpnGateways") == [{"VpnGatewayId": "vgw-1"}]

    def test_call_wraps_error(self, client_error):
        client = MagicMock()
        client.describe_vpn_connections.side_effect = client_error("AuthFailure")

        with pytest.raises(APICallError):
            call(client, "describe_vpn_connections", "VpnConnections")

    def test_filter_kwargs(self):
        assert filter_kwargs([]) == {}
        assert filter_kwargs(VPC_FILTER) == {"Filters": VPC_FILTER}
        assert filter_kwargs(VPC_FILTER, "Filter") == {"Filter": VPC_FILTER}


class TestVpcServices:
    """VPC/Network 수집 함수 테스트"""

    def test_collect_vpcs(self, paginated_client):
        client = paginated_client({"describe_vpcs": [{"Vpcs": [{"VpcId": "vpc-1", "CidrBlock": "10.0.0.0/16"}]}]})

        vpcs = collect_vpcs(client, VPC_FILTER)

        assert [v.vpc_id for v in vpcs] == ["vpc-1"]
        client.get_paginator("describe_vpcs").paginate.assert_called_once_with(Filters=VPC_FILTER)

    def test_empty_filters_not_sent(self, paginated_client):
        """빈 필터는 인자로 전달하지 않음"""
        client = paginated_client({"describe_subnets": [{"Subnets": []}]})

        assert collect_subnets(client, []) == []
        client.get_paginator("describe_subnets").paginate.assert_called_once_with()

    def test_collect_internet_gateways(self, paginated_client):
        client = paginated_client(
            {
                "describe_internet_gateways": [
                    {"InternetGateways": [{"InternetGatewayId": "igw-1", "Attachments": [{"VpcId": "vpc-1"}]}]}
                ]
            }
        )

        igws = collect_internet_gateways(client, [])

        assert igws[0].attached_vpc_ids == ["vpc-1"]

    def test_collect_vpc_peerings(self, paginated_client):
        client = paginated_client(
            {
                "describe_vpc_peering_connections": [
                    {"VpcPeeringConnections": [{"VpcPeeringConnectionId": "pcx-1", "RequesterVpcInfo": {"VpcId": "vpc-1"}}]}
                ]
            }
        )

        assert collect_vpc_peerings(client, [])[0].requester_vpc_id == "vpc-1"

    def test_nat_gateways_use_filter_param(self, paginated_client):
        """describe_nat_gateways는 Filter 파라미터 사용"""
        client = paginated_client({"describe_nat_gateways": [{"NatGateways": [{"NatGatewayId": "nat-1"}]}]})

        nats = collect_nat_gateways(client, VPC_FILTER)

        assert [n.nat_gateway_id for n in nats] == ["nat-1"]
        client.get_paginator("describe_nat_gateways").paginate.assert_called_once_with(Filter=VPC_FILTER)

    def test_vpn_gateways_single_call(self):
        """페이지네이션 없이 단건 호출"""
        client = MagicMock()
        client.describe_vpn_gateways.return_value = {
            "VpnGateways": [{"VpnGatewayId": "vgw-1", "VpcAttachments": [{"VpcId": "vpc-1"}]}]
        }
        filters = [{"Name": "attachment.vpc-id", "Values": ["vpc-1"]}]

        vgws = collect_vpn_gateways(client, filters)

        client.describe_vpn_gateways.assert_called_once_with(Filters=filters)
        client.get_paginator.assert_not_called()
        assert vgws[0].attached_vpc_ids == ["vpc-1"]

    def test_vpn_connections_single_call(self):
        client = MagicMock()
        client.describe_vpn_connections.return_value = {
            "VpnConnections": [{"VpnConnectionId": "vpn-1", "VpnGatewayId": "vgw-1"}]
        }

        vpns = collect_vpn_connections(client, [])

        client.describe_vpn_connections.assert_called_once_with()
        assert vpns[0].vpn_gateway_id == "vgw-1"


class TestEc2Services:
    """EC2 수집 함수 테스트"""

    def test_instances_flatten_reservations(self, paginated_client):
        """Reservations[].Instances[] 평탄화"""
        client = paginated_client(
            {
                "describe_instances": [
                    {"Reservations": [{"Instances": [{"InstanceId": "i-1"}, {"InstanceId": "i-2"}]}]},
                    {"Reservations": [{"Instances": [{"InstanceId": "i-3"}]}, {"Instances": []}]},
                ]
            }
        )

        instances = collect_instances(client, [])

        assert [i.instance_id for i in instances] == ["i-1", "i-2", "i-3"]

    def test_security_groups(self, paginated_client):
        client = paginated_client(
            {"describe_security_groups": [{"SecurityGroups": [{"GroupId": "sg-1", "Description": "web"}]}]}
        )

        assert collect_security_groups(client, [])[0].label() == "sg-1 (web)"

    def test_network_interfaces(self, paginated_client):
        client = paginated_client(
            {"describe_network_interfaces": [{"NetworkInterfaces": [{"NetworkInterfaceId": "eni-1", "VpcId": "vpc-1"}]}]}
        )

        assert collect_network_interfaces(client, [])[0].vpc_id == "vpc-1"

    def test_tag_descriptions(self, paginated_client):
        key_filter = [{"Name": "key", "Values": ["Env"]}]
        client = paginated_client(
            {
                "describe_tags": [
                    {"Tags": [{"Key": "Env", "Value": "prod", "ResourceType": "vpc", "ResourceId": "vpc-1"}]}
                ]
            }
        )

        tags = collect_tag_descriptions(client, key_filter)

        assert tags[0].resource_id == "vpc-1"
        client.get_paginator("describe_tags").paginate.assert_called_once_with(Filters=key_filter)


class TestCloudFormationServices:
    """CloudFormation 수집 함수 테스트"""

    def test_collect_stacks(self, paginated_client):
        client = paginated_client(
            {
                "describe_stacks": [
                    {"Stacks": [{"StackId": "id-1", "StackName": "web", "StackStatus": "CREATE_COMPLETE"}]},
                    {"Stacks": [{"StackId": "id-2", "StackName": "api", "StackStatus": "UPDATE_COMPLETE"}]},
                ]
            }
        )

        stacks = collect_stacks(client)

        assert [s.stack_name for s in stacks] == ["web", "api"]
        client.get_paginator("describe_stacks").paginate.assert_called_once_with()

    def test_collect_stack_resources(self, paginated_client):
        """list_stack_resources 페이지네이션"""
        client = paginated_client(
            {
                "list_stack_resources": [
                    {"StackResourceSummaries": [{"LogicalResourceId": "A", "ResourceType": "AWS::SNS::Topic"}]},
                    {"StackResourceSummaries": [{"LogicalResourceId": "B", "ResourceType": "AWS::SQS::Queue"}]},
                ]
            }
        )

        resources = collect_stack_resources(client, "web")

        assert [r.logical_id for r in resources] == ["A", "B"]
        client.get_paginator("list_stack_resources").paginate.assert_called_once_with(StackName="web")

    def test_stack_error_service_name(self, client_error):
        client = MagicMock()
        client.get_paginator.return_value.paginate.side_effect = client_error("ValidationError", "Stack not found")

        with pytest.raises(APICallError) as exc_info:
            collect_stack_resources(client, "missing")

        assert exc_info.value.service == "cloudformation"
        assert exc_info.value.operation == "list_stack_resources"
